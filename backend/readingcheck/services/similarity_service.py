from collections import Counter
from typing import Optional

from Levenshtein import distance as levenshtein_distance

from .phoneme_service import PhonemeLookup, phoneme_agreement

# Consonant equivalence classes for the coarse sound-alike comparator
_CONSONANT_CLASSES = {
    **dict.fromkeys("bfpv", "B"),        # labials
    **dict.fromkeys("cgjkqsxz", "G"),    # gutturals and sibilants
    **dict.fromkeys("dt", "D"),          # dentals
    **dict.fromkeys("lr", "L"),          # liquids
    **dict.fromkeys("mn", "N"),          # nasals
}
_DROPPED = frozenset("hw")


def string_similarity(first: str, second: str) -> float:
    """
    Dice coefficient over character bigrams, 1.0 for identical strings.

    Whitespace is ignored. Strings shorter than two characters have no bigrams
    and score 0.0 unless identical.
    """
    first = "".join(first.split())
    second = "".join(second.split())
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = Counter(first[i:i + 2] for i in range(len(first) - 1))
    second_bigrams = Counter(second[i:i + 2] for i in range(len(second) - 1))
    overlap = sum((first_bigrams & second_bigrams).values())
    return 2.0 * overlap / (len(first) + len(second) - 2)


def sound_key(word: str) -> str:
    """Reduces a word to its coarse sound shape: consonants folded into classes, h/w dropped, repeats collapsed."""
    key = []
    for ch in word.lower():
        if ch in _DROPPED:
            continue
        folded = _CONSONANT_CLASSES.get(ch, ch)
        if key and key[-1] == folded:
            continue
        key.append(folded)
    return "".join(key)


def sounds_alike(first: str, second: str) -> bool:
    return sound_key(first) == sound_key(second)


def edit_similarity(target_word: str, attempt_word: str) -> float:
    """1 - edit distance / target length, floored at 0.0."""
    if not target_word:
        return 1.0 if not attempt_word else 0.0
    return max(0.0, 1.0 - levenshtein_distance(target_word, attempt_word) / len(target_word))


def phonetic_similarity(target_word: str, attempt_word: str, phoneme_lookup: Optional[PhonemeLookup] = None) -> float:
    coarse = 1.0 if sounds_alike(target_word, attempt_word) else 0.0
    if phoneme_lookup is None:
        return coarse

    target_phonemes = phoneme_lookup.phonemes(target_word)
    attempt_phonemes = phoneme_lookup.phonemes(attempt_word)
    if not target_phonemes or not attempt_phonemes:
        return coarse
    return max(coarse, phoneme_agreement(target_phonemes, attempt_phonemes))


def similarity(target_word: str, attempt_word: str, phoneme_lookup: Optional[PhonemeLookup] = None) -> float:
    """
    Scores how closely an attempted word matches a target word, in [0, 1].

    Takes the best of three signals: bigram string similarity, a sound-alike
    comparison (sharpened by the phoneme dictionary when one is supplied) and
    normalized edit distance. Any one strong signal is enough.
    """
    return min(1.0, max(
        string_similarity(target_word, attempt_word),
        phonetic_similarity(target_word, attempt_word, phoneme_lookup),
        edit_similarity(target_word, attempt_word),
    ))
