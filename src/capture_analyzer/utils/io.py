"""I/O helpers for reading capture exports and writing reports."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from ..errors import UnreadableSourceError


def ensure_dir(path: Path) -> None:
    """Ensure that a directory exists."""

    path.mkdir(parents=True, exist_ok=True)


def read_capture_text(path: Path, encoding: str = "utf-8-sig") -> str:
    """Read a whole capture export, raising :class:`UnreadableSourceError` on failure.

    The default codec drops a leading byte-order mark, which spreadsheet tools
    often add when re-saving an export.
    """

    path = Path(path)
    if not path.is_file():
        raise UnreadableSourceError(path, "file not found")
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise UnreadableSourceError(path, f"not valid {encoding} text ({exc.reason})") from exc
    except OSError as exc:
        raise UnreadableSourceError(path, exc.strerror or str(exc)) from exc


def save_json(path: Path, payload: Dict[str, Any]) -> None:
    """Write a JSON payload with UTF-8 encoding."""

    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
