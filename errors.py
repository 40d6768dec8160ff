from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a caller passes input the scoring functions cannot score."""
