import re
from typing import Protocol

from .text_service import normalize

_VOWEL_GROUPS = re.compile(r"[aeiouy]+")


class AudioSignal(Protocol):
    def speech_rate(self) -> float:
        """Syllables per second."""
        ...


class DurationSignal:
    """Speech rate estimated from a recording's length and the syllables in what was said."""

    def __init__(self, duration_seconds: float, syllable_count: int):
        self.duration_seconds = duration_seconds
        self.syllable_count = syllable_count

    def speech_rate(self) -> float:
        if self.duration_seconds <= 0:
            return 0.0
        return self.syllable_count / self.duration_seconds

    @classmethod
    def from_transcript(cls, duration_seconds: float, transcript: str) -> "DurationSignal":
        return cls(duration_seconds, estimate_syllables(transcript))


def estimate_syllables(text: str) -> int:
    """Rough syllable count: vowel groups per word, at least one per word."""
    return sum(max(1, len(_VOWEL_GROUPS.findall(word))) for word in normalize(text))
