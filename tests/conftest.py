"""Shared fixtures for the scoring tests."""

import json
import sys
from pathlib import Path

import pytest

# Make the top-level modules importable without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture
def result_records() -> list[dict]:
    """Two attempts at passage 1 and one at passage 2, as the server stores them."""
    return [
        {
            "id": 1,
            "passageId": 1,
            "typedContent": "the quik brown dog",
            "duration": 60,
            "wpm": 40,
            "accuracy": 90,
            "mistakes": {"missed": ["fox"], "wrong": ["slow"], "misspelled": ["quick"]},
            "timestamp": "2024-03-01T10:00:00",
        },
        {
            "id": 2,
            "passageId": 1,
            "typedContent": "the quik browm",
            "duration": 60,
            "wpm": 45,
            "accuracy": 95,
            "mistakes": {"missed": ["fox"], "wrong": [], "misspelled": ["quick", "brown"]},
            "timestamp": "2024-03-02T10:00:00",
        },
        {
            "id": 3,
            "passageId": 2,
            "typedContent": "lorem ipsum",
            "duration": 30,
            "wpm": 10,
            "accuracy": 50,
            "mistakes": {"missed": ["dolor"], "wrong": [], "misspelled": []},
            "timestamp": "2024-03-03T10:00:00",
        },
    ]


@pytest.fixture
def results_file(tmp_path: Path, result_records: list[dict]) -> Path:
    path = tmp_path / "results.json"
    path.write_text(json.dumps({"results": result_records}), encoding="utf-8")
    return path
