import math
from typing import Dict, Sequence

from ..models_api.schemas import CategoryScores, TargetPhrase, WordMatch
from .alignment_service import CLEAN_MATCH_THRESHOLD, is_clean_match


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores round .5 up.
    return int(math.floor(value + 0.5))


def percentage(correct: int, total: int) -> int:
    """Whole percentage, or 100 when there is nothing to score."""
    if total == 0:
        return 100
    return round_half_up(100 * correct / total)


def score(
    target_phrase: TargetPhrase,
    matches: Sequence[WordMatch],
    clean_threshold: float = CLEAN_MATCH_THRESHOLD,
) -> CategoryScores:
    """
    Computes per-word sight-word and phonetic-pattern results plus the three scores.

    Sight word membership is tested against the normalized (lower-case) target
    word, so declared sight words are lower-cased before comparison. Phonetic
    patterns are keyed by their text; two positions sharing a pattern string
    collapse into one entry and the later position wins.
    """
    sight_words = {word.lower() for word in target_phrase.sight_words}
    patterns = target_phrase.phonetic_patterns or []

    sight_word_results: Dict[str, bool] = {}
    pattern_results: Dict[str, bool] = {}
    clean_count = 0

    for match in matches:
        clean = is_clean_match(match, clean_threshold)
        if clean:
            clean_count += 1
        if match.target_word in sight_words:
            sight_word_results[match.target_word] = clean
        if match.target_index < len(patterns) and patterns[match.target_index]:
            pattern_results[patterns[match.target_index]] = clean

    return CategoryScores(
        sight_word_accuracy=sight_word_results,
        phonetic_pattern_accuracy=pattern_results,
        # Missing and mispronounced words both count against the overall score
        overall=percentage(clean_count, len(matches)),
        sight_words=percentage(sum(sight_word_results.values()), len(sight_word_results)),
        phonetic_patterns=percentage(sum(pattern_results.values()), len(pattern_results)),
    )
