"""Tests for words-per-minute and accuracy scoring."""

import math

import pytest

from comparison import MistakeSet, compare_words
from errors import InvalidArgumentError
from metrics import (
    accuracy,
    accuracy_from_mistakes,
    compute_metrics,
    round_half_up,
    words_per_minute,
)


class TestRoundHalfUp:

    @pytest.mark.parametrize(
        "value, expected",
        [(2.5, 3), (3.5, 4), (2.4999, 2), (-0.5, 0), (-1.5, -1), (87.5, 88)],
    )
    def test_halves_round_up(self, value, expected):
        assert round_half_up(value) == expected


class TestWordsPerMinute:

    def test_five_words_in_a_minute(self):
        assert words_per_minute("one two three four five", 60) == 5

    def test_half_words_round_up(self):
        assert words_per_minute("one two three four five", 120) == 3
        assert words_per_minute("a b c d e f g h i", 120) == 5

    def test_fractional_duration(self):
        assert words_per_minute("one two three", 30.0) == 6

    def test_empty_text(self):
        assert words_per_minute("", 60) == 0

    @pytest.mark.parametrize("duration", [0, -10, math.inf, math.nan])
    def test_rejects_unusable_duration(self, duration):
        with pytest.raises(InvalidArgumentError):
            words_per_minute("one two", duration)


class TestAccuracy:

    @pytest.mark.parametrize(
        "reference, typed",
        [
            ("the quick brown fox", "the quick brown fox"),
            ("a", "a"),
            ("spaced   out text", " spaced out\ntext "),
            ("Punctuation, too.", "Punctuation, too."),
        ],
    )
    def test_no_mistakes_scores_full_marks(self, reference, typed):
        assert compare_words(reference, typed).is_empty
        assert accuracy(reference, typed) == 100

    def test_one_missed_word(self):
        assert accuracy("a b c d", "a b c") == 75

    def test_rounds_half_up(self):
        assert accuracy("a b c d e f g h", "a b c d e f g") == 88

    def test_not_clamped_below_zero(self):
        # four extra words against a two-word passage
        assert accuracy("a b", "a b c d e f") == -100

    def test_every_word_missed(self):
        assert accuracy("a b c", "") == 0

    @pytest.mark.parametrize("reference", ["", "   \n"])
    def test_rejects_empty_reference(self, reference):
        with pytest.raises(InvalidArgumentError):
            accuracy(reference, "typed words")

    def test_from_existing_mistakes(self):
        mistakes = MistakeSet(missed=("c",), misspelled=("a",))
        assert accuracy_from_mistakes("a b c d", mistakes) == 50


class TestComputeMetrics:

    def test_combined_metrics(self):
        metrics = compute_metrics("the quick brown fox", "the quick browm fox", 60)

        assert metrics["wpm"] == 4
        assert metrics["accuracy"] == 75
        assert metrics["reference_words"] == 4
        assert metrics["typed_words"] == 4
        assert metrics["mistakes"] == MistakeSet(misspelled=("brown",))

    def test_wpm_counts_typed_words(self):
        metrics = compute_metrics("a b c d e f", "a b", 60)
        assert metrics["wpm"] == 2
        assert metrics["mistakes"].missed == ("c", "d", "e", "f")

    def test_zero_duration_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            compute_metrics("a b", "a b", 0)
