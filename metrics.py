from __future__ import annotations

import math

from comparison import MistakeSet, compare_words, token_count
from errors import InvalidArgumentError


def round_half_up(value: float) -> int:
    # .5 always rounds towards +inf so stored scores do not drift
    return math.floor(value + 0.5)


def words_per_minute(text: str, duration_s: float) -> int:
    if not math.isfinite(duration_s) or duration_s <= 0:
        raise InvalidArgumentError(f"Duration must be a positive number of seconds, got {duration_s!r}")
    minutes = duration_s / 60.0
    return round_half_up(token_count(text) / minutes)


def accuracy_from_mistakes(reference: str, mistakes: MistakeSet) -> int:
    total_words = token_count(reference)
    if total_words == 0:
        raise InvalidArgumentError("Reference text has no words to score against")
    # not clamped: a long run of extra words drives this below zero
    return round_half_up((total_words - mistakes.total) / total_words * 100)


def accuracy(reference: str, typed: str) -> int:
    return accuracy_from_mistakes(reference, compare_words(reference, typed))


def compute_metrics(reference: str, typed: str, duration_s: float) -> dict:
    mistakes = compare_words(reference, typed)

    return {
        "reference_words": token_count(reference),
        "typed_words": token_count(typed),
        "wpm": words_per_minute(typed, duration_s),
        "accuracy": accuracy_from_mistakes(reference, mistakes),
        "mistakes": mistakes,
    }
