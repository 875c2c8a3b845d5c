"""Exception types raised by the analysis pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple


class CaptureAnalyzerError(Exception):
    """Base class for analyzer failures."""


class UnreadableSourceError(CaptureAnalyzerError):
    """A capture export could not be read from storage."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Unable to read {self.path}: {reason}")


class CaptureAnalysisError(CaptureAnalyzerError):
    """Analyzing one capture of a batch failed."""

    def __init__(self, file_name: str, reason: str, index: int | None = None, completed: Tuple[Any, ...] = ()) -> None:
        self.file_name = file_name
        self.reason = reason
        self.index = index
        # Captures of the same batch that finished before this one failed.
        self.completed = tuple(completed)
        super().__init__(f"Failed to analyze {file_name}: {reason}")


class TooManyCapturesError(CaptureAnalyzerError):
    """A batch exceeds the configured file cap."""

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(f"{count} captures requested, at most {limit} allowed per session")


__all__ = [
    "CaptureAnalysisError",
    "CaptureAnalyzerError",
    "TooManyCapturesError",
    "UnreadableSourceError",
]
