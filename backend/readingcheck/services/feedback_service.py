from typing import List, Optional, Sequence

from ..core.config import settings
from ..models_api.schemas import MispronouncedWord
from .speech_rate import AudioSignal

SLOW_DOWN_HINT = " Try speaking slower for clearer pronunciation."


def format_feedback(
    missing: Sequence[str],
    extra: Sequence[str],
    mispronounced: Sequence[MispronouncedWord],
    sight_word_score: int,
    phonetic_score: int,
) -> str:
    """
    Builds the human-readable summary shown to the student, e.g.
    "Missing words: stop. Sight word accuracy: 100%. Phonetic accuracy: 67%".
    """
    parts: List[str] = []

    if missing:
        parts.append(f"Missing words: {', '.join(missing)}")

    if extra:
        parts.append(f"Extra words: {', '.join(extra)}")

    if mispronounced:
        parts.append(
            "Mispronounced: " + ", ".join(f"{m.word} (as {m.attempted})" for m in mispronounced)
        )

    parts.append(f"Sight word accuracy: {sight_word_score}%")
    parts.append(f"Phonetic accuracy: {phonetic_score}%")

    return ". ".join(parts) or "Perfect pronunciation!"


def speech_rate_hint(audio_signal: Optional[AudioSignal], fast_rate: float = settings.FAST_SPEECH_RATE) -> str:
    """Advisory suffix for fast readers. Empty when there is no signal or the rate is fine."""
    if audio_signal is None:
        return ""
    return SLOW_DOWN_HINT if audio_signal.speech_rate() > fast_rate else ""
