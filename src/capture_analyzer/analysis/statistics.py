"""Single-pass capture statistics."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable, Optional

from ..data.structures import CaptureStatistics, PacketRecord

UNKNOWN = "Unknown"


@dataclass
class _Totals:
    packets: int = 0
    bytes: int = 0
    protocols: Counter = field(default_factory=Counter)
    sources: Counter = field(default_factory=Counter)
    destinations: Counter = field(default_factory=Counter)
    time_start: Optional[float] = None
    time_end: Optional[float] = None


def _step(totals: _Totals, packet: PacketRecord) -> _Totals:
    totals.packets += 1
    totals.bytes += packet.length
    totals.protocols[packet.protocol or UNKNOWN] += 1
    totals.sources[packet.source or UNKNOWN] += 1
    totals.destinations[packet.destination or UNKNOWN] += 1
    if totals.time_start is None or packet.timestamp < totals.time_start:
        totals.time_start = packet.timestamp
    if totals.time_end is None or packet.timestamp > totals.time_end:
        totals.time_end = packet.timestamp
    return totals


def extract_statistics(packets: Iterable[PacketRecord]) -> CaptureStatistics:
    """Fold ``packets`` into a :class:`CaptureStatistics`.

    The accumulator is private to each call, so concurrent captures never
    share state. Empty input yields zero counts and an open time range.
    """

    totals = reduce(_step, packets, _Totals())
    # Half-up rounding, not banker's rounding.
    avg = math.floor(totals.bytes / totals.packets + 0.5) if totals.packets else 0
    return CaptureStatistics(
        total_packets=totals.packets,
        protocols=dict(totals.protocols),
        sources=dict(totals.sources),
        destinations=dict(totals.destinations),
        total_bytes=totals.bytes,
        avg_packet_size=int(avg),
        time_start=totals.time_start,
        time_end=totals.time_end,
    )


__all__ = ["UNKNOWN", "extract_statistics"]
