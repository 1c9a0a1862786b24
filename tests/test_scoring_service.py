from readingcheck.models_api.schemas import TargetPhrase
from readingcheck.services.alignment_service import align
from readingcheck.services.scoring_service import percentage, round_half_up, score
from readingcheck.services.text_service import normalize


def _score(phrase, attempt):
    return score(phrase, align(normalize(phrase.text), normalize(attempt)))


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(0.5) == 1
    assert round_half_up(200 / 3) == 67


def test_percentage_of_nothing_is_full_marks():
    assert percentage(0, 0) == 100
    assert percentage(1, 8) == 13


def test_sight_words_compare_lower_case():
    phrase = TargetPhrase(text="I am strong", sight_words=["I", "am"])
    result = _score(phrase, "I am strong")
    assert result.sight_word_accuracy == {"i": True, "am": True}
    assert result.sight_words == 100
    assert result.overall == 100


def test_missing_sight_word_is_false():
    phrase = TargetPhrase(text="We can win", sight_words=["we", "can"])
    result = _score(phrase, "we win")
    assert result.sight_word_accuracy == {"we": True, "can": False}
    assert result.sight_words == 50


def test_sight_words_absent_from_text_pass_vacuously():
    phrase = TargetPhrase(text="We can win", sight_words=["the"])
    result = _score(phrase, "")
    assert result.sight_word_accuracy == {}
    assert result.sight_words == 100


def test_phonetic_patterns_use_clean_match():
    phrase = TargetPhrase(
        text="We can win",
        sight_words=["we", "can"],
        phonetic_patterns=["w-ee", "k-ah-n", "w-ih-n"],
    )
    result = _score(phrase, "We can wun")
    assert result.phonetic_pattern_accuracy == {"w-ee": True, "k-ah-n": True, "w-ih-n": False}
    assert result.phonetic_patterns == 67
    assert result.sight_words == 100
    assert result.overall == 67


def test_patterns_shorter_than_text():
    phrase = TargetPhrase(text="We can win", phonetic_patterns=["w-ee"])
    result = _score(phrase, "we can win")
    assert result.phonetic_pattern_accuracy == {"w-ee": True}


def test_duplicate_pattern_text_collapses_last_wins():
    phrase = TargetPhrase(text="go go", phonetic_patterns=["g-oh", "g-oh"])
    result = _score(phrase, "go")
    assert result.phonetic_pattern_accuracy == {"g-oh": False}
    assert result.phonetic_patterns == 0


def test_empty_target_overall_is_full_marks():
    result = _score(TargetPhrase(text=""), "anything at all")
    assert result.overall == 100
