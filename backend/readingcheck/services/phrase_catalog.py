import logging
from typing import List, Tuple

from pydantic import TypeAdapter

from ..models_api.schemas import PhraseSet, TargetPhrase

logger = logging.getLogger(__name__)

_PHRASE_SETS_ADAPTER = TypeAdapter(List[PhraseSet])


class PhraseCatalog:
    """Read-only practice phrases, grouped into sets by phonetic progression."""

    def __init__(self, phrase_sets: List[PhraseSet]):
        self._sets: Tuple[PhraseSet, ...] = tuple(phrase_sets)
        self._by_id = {phrase.id: phrase for phrase in self.all_phrases() if phrase.id}

    @property
    def phrase_sets(self) -> Tuple[PhraseSet, ...]:
        return self._sets

    def all_phrases(self) -> List[TargetPhrase]:
        return [phrase for phrase_set in self._sets for phrase in phrase_set.phrases]

    def get_phrase(self, phrase_id: str) -> TargetPhrase:
        """Raises KeyError for unknown ids."""
        try:
            return self._by_id[phrase_id]
        except KeyError:
            raise KeyError(f"Unknown phrase id: {phrase_id}") from None

    def find_phrases_by_text(self, text: str) -> List[TargetPhrase]:
        return [phrase for phrase in self.all_phrases() if text in phrase.text]


def load_phrase_catalog(path: str) -> PhraseCatalog:
    """Loads phrase sets from a JSON file. Raises FileNotFoundError if it does not exist."""
    with open(path, encoding="utf-8") as f:
        phrase_sets = _PHRASE_SETS_ADAPTER.validate_json(f.read())
    catalog = PhraseCatalog(phrase_sets)
    logger.info(f"Loaded {len(catalog.all_phrases())} phrases in {len(phrase_sets)} sets from {path}")
    return catalog
