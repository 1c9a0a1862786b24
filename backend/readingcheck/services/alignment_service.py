import logging
from typing import List, NamedTuple, Optional, Sequence, Set

from ..core.config import settings
from ..models_api.schemas import MispronouncedWord, WordMatch
from .phoneme_service import PhonemeLookup
from .similarity_service import similarity

logger = logging.getLogger(__name__)

ACCEPT_THRESHOLD: float = settings.ACCEPT_THRESHOLD
CLEAN_MATCH_THRESHOLD: float = settings.CLEAN_MATCH_THRESHOLD


class WordClassification(NamedTuple):
    missing_words: List[str]
    extra_words: List[str]
    mispronounced_words: List[MispronouncedWord]


def align(
    target_words: Sequence[str],
    attempt_words: Sequence[str],
    phoneme_lookup: Optional[PhonemeLookup] = None,
    accept_threshold: float = ACCEPT_THRESHOLD,
) -> List[WordMatch]:
    """
    Greedily aligns attempt words onto target words.

    Target words are processed left to right. Each one takes the best-scoring
    attempt word not already consumed by an earlier target word; on equal scores
    the lowest attempt index wins. The candidate is accepted only if its score is
    strictly above accept_threshold. There is no backtracking, so the result is
    not a globally optimal assignment.

    Returns one WordMatch per target position, in target order.
    """
    consumed: Set[int] = set()
    matches: List[WordMatch] = []

    for target_index, target_word in enumerate(target_words):
        best_index = None
        best_score = 0.0
        for attempt_index, attempt_word in enumerate(attempt_words):
            if attempt_index in consumed:
                continue
            score = similarity(target_word, attempt_word, phoneme_lookup)
            if best_index is None or score > best_score:
                best_index = attempt_index
                best_score = score

        if best_index is not None and best_score > accept_threshold:
            consumed.add(best_index)
            matches.append(WordMatch(
                target_index=target_index,
                target_word=target_word,
                matched_attempt_index=best_index,
                similarity=best_score,
            ))
            logger.debug(f"'{target_word}' -> '{attempt_words[best_index]}' (similarity={best_score:.3f})")
        else:
            matches.append(WordMatch(target_index=target_index, target_word=target_word))
            logger.debug(f"'{target_word}' has no match above {accept_threshold}")

    return matches


def is_clean_match(match: WordMatch, clean_threshold: float = CLEAN_MATCH_THRESHOLD) -> bool:
    return match.matched_attempt_index is not None and match.similarity >= clean_threshold


def classify(
    matches: Sequence[WordMatch],
    attempt_words: Sequence[str],
    clean_threshold: float = CLEAN_MATCH_THRESHOLD,
) -> WordClassification:
    """Splits an alignment into missing target words, unconsumed (extra) attempt words and mispronunciations."""
    missing: List[str] = []
    mispronounced: List[MispronouncedWord] = []
    consumed: Set[int] = set()

    for match in matches:
        if match.matched_attempt_index is None:
            missing.append(match.target_word)
            continue
        consumed.add(match.matched_attempt_index)
        if match.similarity < clean_threshold:
            mispronounced.append(MispronouncedWord(
                word=match.target_word,
                attempted=attempt_words[match.matched_attempt_index],
            ))

    extra = [word for i, word in enumerate(attempt_words) if i not in consumed]
    return WordClassification(missing, extra, mispronounced)
