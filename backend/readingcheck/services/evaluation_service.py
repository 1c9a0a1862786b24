import logging
from typing import Optional

from ..models_api.schemas import EvaluationDetails, EvaluationResult, EvaluationScore, TargetPhrase
from . import alignment_service, feedback_service, scoring_service
from .speech_rate import AudioSignal
from .phoneme_service import PhonemeLookup
from .text_service import normalize

logger = logging.getLogger(__name__)


def evaluate(
    target_phrase: TargetPhrase,
    attempt: str,
    phoneme_lookup: Optional[PhonemeLookup] = None,
    audio_signal: Optional[AudioSignal] = None,
) -> EvaluationResult:
    """
    Scores a spoken attempt (as a transcript) against a target phrase.

    Args:
        target_phrase (TargetPhrase): The phrase the student was asked to read.
        attempt (str): Speech-to-text transcript of what they said. May be empty.
        phoneme_lookup (PhonemeLookup, optional): Pronunciation dictionary that sharpens
            the sound-alike signal. Without it the coarse comparator is used.
        audio_signal (AudioSignal, optional): Speech-rate source for the "speak slower" hint.

    Returns:
        EvaluationResult: feedback text, missing / extra / mispronounced words,
        per-word sight word and phonetic pattern results, and the three scores.

    Pure and deterministic: same inputs, same result. Never raises for string input.
    """
    target_words = normalize(target_phrase.text)
    attempt_words = normalize(attempt)

    matches = alignment_service.align(target_words, attempt_words, phoneme_lookup)
    missing, extra, mispronounced = alignment_service.classify(matches, attempt_words)
    categories = scoring_service.score(target_phrase, matches)

    feedback = feedback_service.format_feedback(
        missing,
        extra,
        mispronounced,
        categories.sight_words,
        categories.phonetic_patterns,
    ) + feedback_service.speech_rate_hint(audio_signal)

    logger.debug(
        f"Evaluated '{target_phrase.text}': overall={categories.overall} "
        f"missing={len(missing)} extra={len(extra)} mispronounced={len(mispronounced)}"
    )

    return EvaluationResult(
        feedback=feedback,
        details=EvaluationDetails(
            missing_words=missing,
            extra_words=extra,
            mispronounced_words=mispronounced,
            sight_word_accuracy=categories.sight_word_accuracy,
            phonetic_pattern_accuracy=categories.phonetic_pattern_accuracy,
        ),
        score=EvaluationScore(
            overall=categories.overall,
            sight_words=categories.sight_words,
            phonetic_patterns=categories.phonetic_patterns,
        ),
    )
