from readingcheck.services.alignment_service import (
    ACCEPT_THRESHOLD,
    CLEAN_MATCH_THRESHOLD,
    align,
    classify,
    is_clean_match,
)
from readingcheck.services.similarity_service import similarity


def test_thresholds():
    assert ACCEPT_THRESHOLD == 0.6
    assert CLEAN_MATCH_THRESHOLD == 0.9


def test_extra_repeated_word():
    matches = align(["a", "cat"], ["a", "cat", "cat"])
    assert [m.matched_attempt_index for m in matches] == [0, 1]
    assert classify(matches, ["a", "cat", "cat"]).extra_words == ["cat"]


def test_ties_keep_lowest_index():
    matches = align(["cat"], ["cat", "cat"])
    assert matches[0].matched_attempt_index == 0


def test_ties_between_different_words_keep_lowest_index():
    # "bat" and "hat" are both one edit from "cat" and score the same
    assert similarity("cat", "bat") == similarity("cat", "hat") < CLEAN_MATCH_THRESHOLD
    assert align(["cat"], ["bat", "hat"])[0].matched_attempt_index == 0
    assert align(["cat"], ["hat", "bat"])[0].matched_attempt_index == 0


def test_attempt_words_are_never_reused():
    attempt = ["the", "the"]
    matches = align(["the", "the", "the"], attempt)
    assert [m.matched_attempt_index for m in matches] == [0, 1, None]
    assert classify(matches, attempt).missing_words == ["the"]


def test_alignment_is_greedy_in_target_order():
    # "bat" takes the only "cat" before the real "cat" gets a chance
    attempt = ["cat"]
    matches = align(["bat", "cat"], attempt)
    result = classify(matches, attempt)
    assert result.missing_words == ["cat"]
    assert [(m.word, m.attempted) for m in result.mispronounced_words] == [("bat", "cat")]


def test_score_at_threshold_is_not_accepted():
    attempt = ["fink"]
    matches = align(["think"], attempt)
    assert matches[0].matched_attempt_index is None
    assert matches[0].similarity == 0.0
    assert classify(matches, attempt).extra_words == ["fink"]


def test_phoneme_lookup_changes_acceptance(phoneme_lookup):
    matches = align(["think"], ["fink"], phoneme_lookup)
    assert matches[0].matched_attempt_index == 0
    assert is_clean_match(matches[0])


def test_mispronounced_keeps_literal_attempt():
    attempt = ["we", "can", "wun"]
    matches = align(["we", "can", "win"], attempt)
    result = classify(matches, attempt)
    assert result.missing_words == []
    assert result.extra_words == []
    assert [(m.word, m.attempted) for m in result.mispronounced_words] == [("win", "wun")]
    assert ACCEPT_THRESHOLD < matches[2].similarity < CLEAN_MATCH_THRESHOLD


def test_empty_attempt_marks_everything_missing():
    matches = align(["cat", "sat"], [])
    result = classify(matches, [])
    assert result.missing_words == ["cat", "sat"]
    assert result.extra_words == []


def test_empty_target_makes_everything_extra():
    matches = align([], ["hello", "there"])
    result = classify(matches, ["hello", "there"])
    assert matches == []
    assert result.missing_words == []
    assert result.mispronounced_words == []
    assert result.extra_words == ["hello", "there"]


def test_unicode_input_does_not_raise():
    attempt = ["cafe", "naive", "日本"]
    matches = align(["café", "naïve"], attempt)
    assert len(matches) == 2
