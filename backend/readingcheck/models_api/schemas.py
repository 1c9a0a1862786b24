from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Literal, Optional

class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)

class TargetPhrase(FrozenModel):
    text: str
    sight_words: List[str] = []
    # phonetic_patterns[i] describes word i of the normalized text. May be shorter than the word count.
    phonetic_patterns: Optional[List[str]] = None
    # Catalog metadata, not used for scoring
    id: Optional[str] = None
    difficulty: Optional[Literal["easy", "medium", "hard"]] = None

class PhraseSet(FrozenModel):
    id: str
    focus: str
    phrases: List[TargetPhrase]

class WordMatch(FrozenModel):
    target_index: int
    target_word: str
    matched_attempt_index: Optional[int] = None # None means the target word is missing
    similarity: float = 0.0

class MispronouncedWord(FrozenModel):
    word: str # Target word
    attempted: str # Literal attempt word it was matched to

class CategoryScores(FrozenModel):
    sight_word_accuracy: Dict[str, bool]
    phonetic_pattern_accuracy: Dict[str, bool] # Keyed by pattern text, duplicate patterns collapse
    overall: int
    sight_words: int
    phonetic_patterns: int

class EvaluationDetails(FrozenModel):
    missing_words: List[str]
    extra_words: List[str]
    mispronounced_words: List[MispronouncedWord]
    sight_word_accuracy: Dict[str, bool]
    phonetic_pattern_accuracy: Dict[str, bool]

class EvaluationScore(FrozenModel):
    overall: int
    sight_words: int
    phonetic_patterns: int

class EvaluationResult(FrozenModel):
    feedback: str
    details: EvaluationDetails
    score: EvaluationScore

class EvaluateRequest(BaseModel):
    target: TargetPhrase
    attempt: str
    # Length of the recording, if the caller has one. Drives the speech-rate hint only.
    audio_duration_seconds: Optional[float] = None
