"""Turn exported packet dissection CSV text into :class:`PacketRecord` rows."""

from __future__ import annotations

import csv
import io
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ..utils.logging import get_logger
from .structures import PacketRecord, ParseError

logger = get_logger(__name__)

# Recognized header names per record field, compared case-insensitively.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "number": ("no.", "no", "number"),
    "timestamp": ("time",),
    "source": ("source",),
    "destination": ("destination",),
    "protocol": ("protocol",),
    "length": ("length",),
    "info": ("info",),
}

# Leading-number patterns; trailing garbage after the number is ignored.
_INT_PREFIX = r"^\s*([-+]?\d+)"
_FLOAT_PREFIX = r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"


def clean_header(name: str) -> str:
    return name.replace("\ufeff", "").strip().replace('"', "")


def _field_positions(header: Sequence[str]) -> Dict[str, Optional[int]]:
    lowered = [name.lower() for name in header]
    positions: Dict[str, Optional[int]] = {}
    for field_name, aliases in FIELD_ALIASES.items():
        positions[field_name] = next((idx for idx, name in enumerate(lowered) if name in aliases), None)
    return positions


def _tokenize(raw_text: str) -> Tuple[List[str], List[List[str]], List[ParseError]]:
    reader = csv.reader(io.StringIO(raw_text))
    header: List[str] = []
    body: List[List[str]] = []
    errors: List[ParseError] = []
    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            errors.append(ParseError(row=len(body), code="MalformedRow", message=str(exc)))
            continue
        if not any(cell.strip() for cell in row):
            continue
        if not header:
            header = [clean_header(cell) for cell in row]
            continue
        width = len(header)
        if len(row) < width:
            errors.append(
                ParseError(
                    row=len(body),
                    code="TooFewFields",
                    message=f"Too few fields: expected {width} fields but parsed {len(row)}",
                )
            )
            row = row + [""] * (width - len(row))
        elif len(row) > width:
            errors.append(
                ParseError(
                    row=len(body),
                    code="TooManyFields",
                    message=f"Too many fields: expected {width} fields but parsed {len(row)}",
                )
            )
            row = row[:width]
        body.append(row)
    return header, body, errors


def _leading_number(column: pd.Series, pattern: str, default: float) -> pd.Series:
    extracted = column.str.extract(pattern, expand=False)
    return pd.to_numeric(extracted, errors="coerce").fillna(default)


def _to_frame(header: Sequence[str], body: List[List[str]]) -> pd.DataFrame:
    positions = _field_positions(header)
    columns = {}
    for field_name, idx in positions.items():
        values = [row[idx] for row in body] if idx is not None else [""] * len(body)
        columns[field_name] = pd.Series(values, dtype="object")
    frame = pd.DataFrame(columns)
    frame["number"] = _leading_number(frame["number"], _INT_PREFIX, 0).astype("int64")
    frame["timestamp"] = _leading_number(frame["timestamp"], _FLOAT_PREFIX, 0.0).astype("float64")
    frame["length"] = _leading_number(frame["length"], _INT_PREFIX, 0).clip(lower=0).astype("int64")
    for text_field in ("source", "destination", "protocol", "info"):
        frame[text_field] = frame[text_field].str.strip()
    return frame


def normalize(raw_text: str) -> Tuple[List[PacketRecord], List[ParseError]]:
    """Parse CSV text (header row first) into packet records.

    Structurally broken rows are kept as partial records and reported in the
    returned error list; parsing never aborts on a bad row.
    """

    if not raw_text or not raw_text.strip():
        return [], []
    header, body, errors = _tokenize(raw_text)
    if errors:
        logger.warning("malformed_rows", count=len(errors), first=errors[0].message)
    if not body:
        return [], errors

    positions = _field_positions(header)
    missing = [name for name, idx in positions.items() if idx is None]
    if missing:
        logger.warning("missing_columns", columns=missing)

    frame = _to_frame(header, body)
    records = [
        PacketRecord(
            number=int(row.number),
            timestamp=float(row.timestamp),
            source=row.source,
            destination=row.destination,
            protocol=row.protocol,
            length=int(row.length),
            info=row.info,
        )
        for row in frame.itertuples(index=False)
    ]
    logger.debug("normalized", rows=len(records), errors=len(errors))
    return records, errors


__all__ = ["FIELD_ALIASES", "clean_header", "normalize"]
