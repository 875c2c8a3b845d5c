"""Fixed-width throughput windows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..data.structures import PacketRecord, ThroughputSample


@dataclass
class WindowingParams:
    interval: float = 1.0


class ThroughputWindower:
    """Bucket packets by ``floor(timestamp / interval)``."""

    def __init__(self, params: WindowingParams) -> None:
        if params.interval <= 0:
            raise ValueError("Throughput interval must be positive.")
        self.params = params

    def build(self, packets: Sequence[PacketRecord]) -> List[ThroughputSample]:
        if not packets:
            return []
        interval = self.params.interval
        frame = pd.DataFrame(
            {
                "bucket": np.floor(np.array([pkt.timestamp for pkt in packets], dtype=float) / interval).astype(np.int64),
                "length": np.array([pkt.length for pkt in packets], dtype=np.int64),
            }
        )
        grouped = frame.groupby("bucket", sort=True)["length"].agg(["sum", "count"])
        samples: List[ThroughputSample] = []
        for bucket, row in grouped.iterrows():
            total = int(row["sum"])
            count = int(row["count"])
            samples.append(
                ThroughputSample(
                    time=int(bucket) * interval,
                    bytes=total,
                    packets=count,
                    bytes_per_second=total / interval,
                    packets_per_second=count / interval,
                )
            )
        return samples


def calculate_throughput(packets: Sequence[PacketRecord], interval: float = 1.0) -> List[ThroughputSample]:
    """Throughput series sorted by bucket start time."""

    return ThroughputWindower(WindowingParams(interval=interval)).build(packets)


def average_throughput(samples: Sequence[ThroughputSample]) -> float:
    """Mean ``bytes_per_second``; 0.0 for an empty series."""

    if not samples:
        return 0.0
    return float(np.mean([sample.bytes_per_second for sample in samples]))


def peak_throughput(samples: Sequence[ThroughputSample]) -> Optional[ThroughputSample]:
    """Sample with the highest ``bytes_per_second``; the earliest wins ties."""

    if not samples:
        return None
    return max(samples, key=lambda sample: sample.bytes_per_second)


__all__ = [
    "ThroughputWindower",
    "WindowingParams",
    "average_throughput",
    "calculate_throughput",
    "peak_throughput",
]
