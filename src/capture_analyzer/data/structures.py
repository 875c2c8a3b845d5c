"""Data structures used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PacketRecord:
    """One normalized row of a packet dissection export."""

    number: int
    timestamp: float
    source: str
    destination: str
    protocol: str
    length: int
    info: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ParseError:
    """A structural problem found on one row while normalizing."""

    row: int
    code: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CaptureStatistics:
    """Aggregate counters for a single capture."""

    total_packets: int
    protocols: Dict[str, int]
    sources: Dict[str, int]
    destinations: Dict[str, int]
    total_bytes: int
    avg_packet_size: int
    time_start: Optional[float]
    time_end: Optional[float]

    @property
    def duration(self) -> float:
        if self.time_start is None or self.time_end is None:
            return 0.0
        return self.time_end - self.time_start

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["duration"] = self.duration
        return payload


@dataclass
class Connection:
    """A single-direction TCP flow and its handshake/teardown state."""

    source: str
    source_port: str
    destination: str
    destination_port: str
    syn: bool = False
    syn_ack: bool = False
    ack: bool = False
    established: bool = False
    fin: bool = False
    closed: bool = False
    packets: List[PacketRecord] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.source}:{self.source_port}-{self.destination}:{self.destination_port}"

    @property
    def total_bytes(self) -> int:
        return sum(packet.length for packet in self.packets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": f"{self.source}:{self.source_port}",
            "destination": f"{self.destination}:{self.destination_port}",
            "syn": self.syn,
            "syn_ack": self.syn_ack,
            "ack": self.ack,
            "established": self.established,
            "fin": self.fin,
            "closed": self.closed,
            "packet_count": len(self.packets),
            "total_bytes": self.total_bytes,
            "packets": [packet.to_dict() for packet in self.packets],
        }


@dataclass(frozen=True)
class ThroughputSample:
    """Traffic volume inside one fixed-width time bucket."""

    time: float
    bytes: int
    packets: int
    bytes_per_second: float
    packets_per_second: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TalkerStats:
    """Traffic sent and received by one address."""

    address: str
    sent_packets: int
    sent_bytes: int
    received_packets: int
    received_bytes: int
    address_type: str = "Unknown"

    @property
    def total_packets(self) -> int:
        return self.sent_packets + self.received_packets

    @property
    def total_bytes(self) -> int:
        return self.sent_bytes + self.received_bytes

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["total_packets"] = self.total_packets
        payload["total_bytes"] = self.total_bytes
        return payload


class Severity(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class SecurityFinding:
    """One heuristic security observation."""

    type: str
    severity: Severity
    description: str
    metric: str
    value: int
    source: Optional[str] = None
    destination: Optional[str] = None
    protocol: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type,
            "severity": self.severity.value,
            "description": self.description,
            self.metric: self.value,
        }
        for key in ("source", "destination", "protocol"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


__all__ = [
    "CaptureStatistics",
    "Connection",
    "PacketRecord",
    "ParseError",
    "SecurityFinding",
    "Severity",
    "TalkerStats",
    "ThroughputSample",
]
