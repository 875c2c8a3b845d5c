"""Top talker ranking."""

from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from ..data.structures import PacketRecord, TalkerStats
from ..utils.netutils import address_type


def _tally(packets: Sequence[PacketRecord]) -> Dict[str, Dict[str, int]]:
    stats: Dict[str, Dict[str, int]] = {}
    for packet in packets:
        sender = stats.setdefault(packet.source, dict.fromkeys(("sp", "sb", "rp", "rb"), 0))
        sender["sp"] += 1
        sender["sb"] += packet.length
        receiver = stats.setdefault(packet.destination, dict.fromkeys(("sp", "sb", "rp", "rb"), 0))
        receiver["rp"] += 1
        receiver["rb"] += packet.length
    return stats


def identify_top_talkers(packets: Sequence[PacketRecord], limit: int = 10) -> List[TalkerStats]:
    """Addresses ranked by bytes sent plus received.

    Equal totals keep first-seen order (stable sort).
    """

    stats = _tally(packets)
    if not stats or limit <= 0:
        return []
    frame = pd.DataFrame.from_dict(stats, orient="index")
    frame["total"] = frame["sb"] + frame["rb"]
    ranked = frame.sort_values("total", ascending=False, kind="stable").head(limit)
    return [
        TalkerStats(
            address=str(address),
            sent_packets=int(row["sp"]),
            sent_bytes=int(row["sb"]),
            received_packets=int(row["rp"]),
            received_bytes=int(row["rb"]),
            address_type=address_type(str(address)),
        )
        for address, row in ranked.iterrows()
    ]


__all__ = ["identify_top_talkers"]
