"""TCP connection reconstruction from dissector summaries."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence

from ..data.structures import Connection, PacketRecord
from . import flags


@dataclass(frozen=True)
class ConnectionIssue:
    """A per-packet TCP anomaly."""

    packet_number: int
    type: str
    source: str
    destination: str
    time: float
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_ISSUE_RULES = (
    (
        flags.is_retransmission,
        "TCP Retransmission",
        "Packet was retransmitted, indicating possible network congestion or packet loss",
    ),
    (
        flags.is_rst,
        "TCP Reset",
        "Connection was reset, possibly due to application error or firewall",
    ),
    (
        flags.is_dup_ack,
        "Duplicate ACK",
        "Duplicate acknowledgment received, indicating missing packets",
    ),
)


def _advance(conn: Connection, info: str) -> None:
    # Flags are set-once; later packets never clear them.
    if flags.is_syn(info):
        conn.syn = True
    if flags.is_syn_ack(info):
        conn.syn_ack = True
    if flags.is_ack(info) and conn.syn_ack and not conn.established:
        conn.ack = True
        conn.established = True
    if flags.is_fin(info):
        conn.fin = True
    if conn.fin and flags.is_ack(info):
        conn.closed = True


def reconstruct_connections(packets: Sequence[PacketRecord]) -> List[Connection]:
    """Group TCP packets by ``source:port -> destination:port`` and track handshake state.

    Keying is per direction: replies from the destination land on their own
    connection, so a SYN-ACK never completes the handshake of the SYN that
    triggered it. Packets without a port annotation are skipped.
    """

    connections: Dict[str, Connection] = {}
    for packet in packets:
        if packet.protocol != "TCP":
            continue
        ports = flags.port_pair(packet.info)
        if ports is None:
            continue
        src_port, dst_port = ports
        key = f"{packet.source}:{src_port}-{packet.destination}:{dst_port}"
        conn = connections.get(key)
        if conn is None:
            conn = Connection(
                source=packet.source,
                source_port=src_port,
                destination=packet.destination,
                destination_port=dst_port,
            )
            connections[key] = conn
        conn.packets.append(packet)
        _advance(conn, packet.info)
    return list(connections.values())


def detect_connection_issues(packets: Sequence[PacketRecord]) -> List[ConnectionIssue]:
    """Retransmissions, resets and duplicate ACKs, one entry per matching rule per packet."""

    issues: List[ConnectionIssue] = []
    for packet in packets:
        for matches, issue_type, description in _ISSUE_RULES:
            if matches(packet.info):
                issues.append(
                    ConnectionIssue(
                        packet_number=packet.number,
                        type=issue_type,
                        source=packet.source,
                        destination=packet.destination,
                        time=packet.timestamp,
                        description=description,
                    )
                )
    return issues


def summarize_connections(connections: Sequence[Connection], issues: Sequence[ConnectionIssue]) -> Dict[str, Any]:
    established = sum(1 for conn in connections if conn.established)
    return {
        "total": len(connections),
        "established": established,
        "closed": sum(1 for conn in connections if conn.closed),
        "failed": len(connections) - established,
        "issues": [issue.to_dict() for issue in issues],
        "details": [conn.to_dict() for conn in connections],
    }


__all__ = [
    "ConnectionIssue",
    "detect_connection_issues",
    "reconstruct_connections",
    "summarize_connections",
]
