from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from comparison import MistakeSet, MistakeType
from errors import InvalidArgumentError
from metrics import round_half_up


logger = logging.getLogger(__name__)

DEFAULT_RESULTS_FILE = Path.home() / ".typing-tutor" / "results.json"
TOP_MISTAKES_LIMIT = 10


@dataclass
class TestResult:
    id: int | None
    typed_content: str
    duration: int
    wpm: int
    accuracy: int
    mistakes: MistakeSet = field(default_factory=MistakeSet)
    passage_id: int | None = None
    timestamp: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestResult:
        try:
            return cls(
                id=int(data["id"]) if data.get("id") is not None else None,
                typed_content=data["typedContent"],
                duration=int(data["duration"]),
                wpm=int(data["wpm"]),
                accuracy=int(data["accuracy"]),
                mistakes=MistakeSet.from_dict(data.get("mistakes") or {}),
                passage_id=data.get("passageId"),
                timestamp=data.get("timestamp") or "",
            )
        except InvalidArgumentError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Malformed test result record: {exc}") from exc


@dataclass(frozen=True)
class WordFrequency:
    word: str
    frequency: int
    type: MistakeType


@dataclass
class PassageStats:
    total_attempts: int = 0
    average_wpm: int = 0
    average_accuracy: int = 0
    frequent_mistakes: list[WordFrequency] = field(default_factory=list)


class StatsStore:
    """Read-only view over the results file kept by the practice server."""

    def __init__(self, path: Path = DEFAULT_RESULTS_FILE) -> None:
        self.path = path

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"results": []}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Ignoring unreadable results file %s", self.path)
            return {"results": []}
        if isinstance(data, list):
            return {"results": data}
        if not isinstance(data, dict):
            raise InvalidArgumentError(
                f"Results file {self.path} must hold an object or a list, got {type(data).__name__}"
            )
        return data

    def results(self) -> list[TestResult]:
        records = self.load().get("results", [])
        if not isinstance(records, list):
            raise InvalidArgumentError(f"'results' in {self.path} must be a list")
        logger.debug("Loaded %d result records from %s", len(records), self.path)
        return [TestResult.from_dict(record) for record in records]


def _mistake_frequencies(results: Iterable[TestResult]) -> list[WordFrequency]:
    counts: Counter[tuple[str, MistakeType]] = Counter()
    for result in results:
        for mistake_type in MistakeType:
            for word in result.mistakes.words(mistake_type):
                counts[(word, mistake_type)] += 1

    frequencies = [
        WordFrequency(word=word, frequency=frequency, type=mistake_type)
        for (word, mistake_type), frequency in counts.items()
    ]
    # sorted() is stable, so ties keep first-seen order
    return sorted(frequencies, key=lambda wf: wf.frequency, reverse=True)


def passage_stats(results: Iterable[TestResult], passage_id: int | None = None) -> PassageStats:
    selected = [r for r in results if passage_id is None or r.passage_id == passage_id]
    if not selected:
        return PassageStats()

    total = len(selected)
    return PassageStats(
        total_attempts=total,
        average_wpm=round_half_up(sum(r.wpm for r in selected) / total),
        average_accuracy=round_half_up(sum(r.accuracy for r in selected) / total),
        frequent_mistakes=_mistake_frequencies(selected)[:TOP_MISTAKES_LIMIT],
    )


def master_error_list(results: Iterable[TestResult]) -> list[WordFrequency]:
    return _mistake_frequencies(results)
