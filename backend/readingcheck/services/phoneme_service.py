import logging
import os
import re
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

import cmudict

logger = logging.getLogger(__name__)

# Spoken phonemes accepted in place of a target phoneme (child speech and lisp patterns)
PHONEME_EQUIVALENCIES: Mapping[str, frozenset] = MappingProxyType({
    "TH": frozenset({"F", "V", "S"}),
    "R": frozenset({"W"}),
    "S": frozenset({"TH"}),
    "SH": frozenset({"S"}),
})

_STRESS_DIGITS = re.compile(r"\d")
_ALTERNATE_SUFFIX = re.compile(r"\(\d+\)$")


class PhonemeLookup(Protocol):
    def phonemes(self, word: str) -> Optional[List[str]]:
        ...


class DictionaryPhonemeLookup:
    """In-memory word -> phoneme sequence table (ARPAbet, as in the CMU dictionary)."""

    def __init__(self, entries: Mapping[str, Sequence[str]]):
        self._entries = MappingProxyType({word.upper(): tuple(phones) for word, phones in entries.items()})

    def __len__(self) -> int:
        return len(self._entries)

    def phonemes(self, word: str) -> Optional[List[str]]:
        entry = self._entries.get(word.upper())
        return list(entry) if entry is not None else None


def load_phoneme_dictionary(path: str) -> Optional[DictionaryPhonemeLookup]:
    """
    Loads a CMU-format pronouncing dictionary from disk.

    Only the first pronunciation of each word is kept. Returns None when the
    file is missing or unreadable so callers fall back to the coarse comparator.
    """
    if not path:
        return None
    if not os.path.exists(path):
        logger.warning(f"Phoneme dictionary not found at {path}. Coarse sound-alike matching will be used.")
        return None

    entries: Dict[str, List[str]] = {}
    try:
        with open(path, encoding="latin-1") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line or line.startswith(";;;"):
                    continue
                parts = line.split()
                if len(parts) < 2:
                    logger.debug(f"Skipping malformed dictionary line {line_no}: {line!r}")
                    continue
                word = _ALTERNATE_SUFFIX.sub("", parts[0]).upper()
                entries.setdefault(word, parts[1:])
    except OSError as e:
        logger.warning(f"Could not read phoneme dictionary {path}: {e}. Coarse sound-alike matching will be used.")
        return None

    logger.info(f"Loaded {len(entries)} pronunciations from {path}")
    return DictionaryPhonemeLookup(entries)


def is_phoneme_match(target: str, actual: Optional[str]) -> bool:
    if actual is None:
        return False
    target = _STRESS_DIGITS.sub("", target)
    actual = _STRESS_DIGITS.sub("", actual)
    return target == actual or actual in PHONEME_EQUIVALENCIES.get(target, frozenset())


def phoneme_agreement(target_phonemes: Sequence[str], attempt_phonemes: Sequence[str]) -> float:
    """Fraction of target phonemes matched position by position. Extra attempt phonemes are ignored."""
    if not target_phonemes or not attempt_phonemes:
        return 0.0
    hits = 0
    for j, phoneme in enumerate(target_phonemes):
        actual = attempt_phonemes[j] if j < len(attempt_phonemes) else None
        if is_phoneme_match(phoneme, actual):
            hits += 1
    return hits / len(target_phonemes)


def load_cmudict_lookup() -> Optional[DictionaryPhonemeLookup]:
    """Builds a lookup from the CMU dictionary bundled with the cmudict package, first pronunciation per word."""
    try:
        entries = {word: pronunciations[0] for word, pronunciations in cmudict.dict().items() if pronunciations}
    except Exception as e:
        logger.warning(f"Could not load the bundled CMU dictionary: {e}. Coarse sound-alike matching will be used.")
        return None
    logger.info(f"Loaded {len(entries)} pronunciations from the bundled CMU dictionary")
    return DictionaryPhonemeLookup(entries)


def load_phoneme_lookup(path: str = "") -> Optional[DictionaryPhonemeLookup]:
    """
    Phoneme lookup for the service: the dictionary file at `path` when one is
    configured and readable, otherwise the bundled CMU dictionary.
    """
    if path:
        lookup = load_phoneme_dictionary(path)
        if lookup is not None:
            return lookup
    return load_cmudict_lookup()
