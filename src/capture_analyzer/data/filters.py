"""Record selection helpers."""

from __future__ import annotations

from typing import List, Sequence

from .structures import PacketRecord


def filter_by_protocol(packets: Sequence[PacketRecord], protocol: str) -> List[PacketRecord]:
    return [packet for packet in packets if packet.protocol == protocol]


def filter_by_address(packets: Sequence[PacketRecord], address: str) -> List[PacketRecord]:
    """Packets where ``address`` is the source or the destination."""

    return [packet for packet in packets if address in (packet.source, packet.destination)]


__all__ = ["filter_by_address", "filter_by_protocol"]
