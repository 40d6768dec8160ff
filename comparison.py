"""Word-level comparison of a typed transcript against a reference passage."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
import logging
import re
from typing import Any

from errors import InvalidArgumentError


logger = logging.getLogger(__name__)

MISSPELLING_THRESHOLD = 0.7


class MistakeType(str, Enum):
    MISSED = "missed"
    WRONG = "wrong"
    MISSPELLED = "misspelled"


@dataclass(frozen=True)
class MistakeSet:
    missed: tuple[str, ...] = ()
    wrong: tuple[str, ...] = ()
    misspelled: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.missed) + len(self.wrong) + len(self.misspelled)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def words(self, mistake_type: MistakeType) -> tuple[str, ...]:
        if mistake_type is MistakeType.MISSED:
            return self.missed
        if mistake_type is MistakeType.WRONG:
            return self.wrong
        if mistake_type is MistakeType.MISSPELLED:
            return self.misspelled
        raise InvalidArgumentError(f"Unknown mistake type: {mistake_type!r}")

    def counts(self, mistake_type: MistakeType) -> list[tuple[str, int]]:
        """Distinct words of one type with how often each was repeated."""
        return list(Counter(self.words(mistake_type)).items())

    def to_dict(self) -> dict[str, list[str]]:
        return {t.value: list(self.words(t)) for t in MistakeType}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MistakeSet:
        if not isinstance(data, dict):
            raise InvalidArgumentError(f"Mistakes must be an object, got {type(data).__name__}")
        unknown = set(data) - {t.value for t in MistakeType}
        if unknown:
            raise InvalidArgumentError(f"Unknown mistake types: {sorted(unknown)}")
        return cls(
            missed=_word_tuple(data, MistakeType.MISSED),
            wrong=_word_tuple(data, MistakeType.WRONG),
            misspelled=_word_tuple(data, MistakeType.MISSPELLED),
        )


def _word_tuple(data: dict[str, Any], mistake_type: MistakeType) -> tuple[str, ...]:
    words = data.get(mistake_type.value, [])
    if not isinstance(words, list) or not all(isinstance(word, str) for word in words):
        raise InvalidArgumentError(f"{mistake_type.value!r} must be a list of words")
    return tuple(words)


def tokenize(text: str) -> list[str]:
    """Split text into whitespace-delimited words.

    Empty or whitespace-only text gives an empty list.
    """
    return [token for token in re.split(r"\s+", text.strip()) if token]


def token_count(text: str) -> int:
    return len(tokenize(text))


def edit_distance(first: str, second: str) -> int:
    """Levenshtein distance using a single row of costs over the longer word."""
    longer, shorter = (first, second) if len(first) >= len(second) else (second, first)

    costs = list(range(len(longer) + 1))
    for i in range(1, len(shorter) + 1):
        costs[0] = i
        diagonal = i - 1
        for j in range(1, len(longer) + 1):
            substitution = diagonal if shorter[i - 1] == longer[j - 1] else diagonal + 1
            current = min(1 + min(costs[j], costs[j - 1]), substitution)
            diagonal = costs[j]
            costs[j] = current
    return costs[len(longer)]


def similarity(first: str, second: str) -> float:
    """Share of the longer word left untouched by the edit distance.

    Only the longer word's length is used as the denominator, so scores
    stay comparable with previously stored results.
    """
    longer_len = max(len(first), len(second))
    if longer_len == 0:
        return 1.0
    return (longer_len - edit_distance(first, second)) / longer_len


def compare_words(reference: str, typed: str) -> MistakeSet:
    reference_words = tokenize(reference)
    typed_words = tokenize(typed)

    missed: list[str] = []
    wrong: list[str] = []
    misspelled: list[str] = []

    for i in range(max(len(reference_words), len(typed_words))):
        if i >= len(reference_words):
            # typed past the end of the passage
            wrong.append(typed_words[i])
            continue
        if i >= len(typed_words):
            missed.append(reference_words[i])
            continue

        expected = reference_words[i]
        actual = typed_words[i]
        if actual == expected:
            continue
        if similarity(expected, actual) > MISSPELLING_THRESHOLD:
            misspelled.append(expected)
        else:
            wrong.append(actual)

    mistakes = MistakeSet(missed=tuple(missed), wrong=tuple(wrong), misspelled=tuple(misspelled))
    logger.debug(
        "Compared %d reference words with %d typed words: %d missed, %d wrong, %d misspelled",
        len(reference_words),
        len(typed_words),
        len(mistakes.missed),
        len(mistakes.wrong),
        len(mistakes.misspelled),
    )
    return mistakes
