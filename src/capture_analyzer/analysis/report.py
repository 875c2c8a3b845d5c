"""Per-capture report assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ..config.types import Config, default_config
from ..data.structures import CaptureStatistics, Connection, PacketRecord, SecurityFinding, TalkerStats, ThroughputSample
from .connections import ConnectionIssue, detect_connection_issues, reconstruct_connections, summarize_connections
from .dns import DnsSummary, analyze_dns
from .security import SecurityScanner
from .statistics import extract_statistics
from .talkers import identify_top_talkers
from .windowing import average_throughput, calculate_throughput, peak_throughput


@dataclass(frozen=True)
class CaptureReport:
    """Every analytical view of exactly one capture."""

    file_name: str
    statistics: CaptureStatistics
    connections: Tuple[Connection, ...]
    connection_issues: Tuple[ConnectionIssue, ...]
    throughput: Tuple[ThroughputSample, ...]
    top_talkers: Tuple[TalkerStats, ...]
    dns: DnsSummary
    security: Tuple[SecurityFinding, ...]

    @property
    def average_throughput(self) -> float:
        return average_throughput(self.throughput)

    @property
    def peak_throughput(self) -> Optional[ThroughputSample]:
        return peak_throughput(self.throughput)

    @property
    def established_connections(self) -> int:
        return sum(1 for conn in self.connections if conn.established)

    @property
    def closed_connections(self) -> int:
        return sum(1 for conn in self.connections if conn.closed)

    def overview(self) -> Dict[str, Any]:
        stats = self.statistics
        return {
            "total_packets": stats.total_packets,
            "total_bytes": stats.total_bytes,
            "avg_packet_size": stats.avg_packet_size,
            "unique_sources": len(stats.sources),
            "unique_destinations": len(stats.destinations),
            "protocol_distribution": dict(stats.protocols),
            "time_span": {"start": stats.time_start, "end": stats.time_end, "duration": stats.duration},
        }

    def to_dict(self) -> Dict[str, Any]:
        peak = self.peak_throughput
        return {
            "file_name": self.file_name,
            "overview": self.overview(),
            "connections": summarize_connections(self.connections, self.connection_issues),
            "performance": {
                "throughput": [sample.to_dict() for sample in self.throughput],
                "average_throughput": self.average_throughput,
                "peak_throughput": peak.to_dict() if peak is not None else None,
            },
            "top_talkers": [talker.to_dict() for talker in self.top_talkers],
            "dns": self.dns.to_dict(),
            "security": {
                "issues_found": len(self.security),
                "issues": [finding.to_dict() for finding in self.security],
            },
        }


def build_report(
    packets: Sequence[PacketRecord],
    file_name: str = "capture",
    config: Config | None = None,
    statistics: CaptureStatistics | None = None,
) -> CaptureReport:
    """Run every analyzer over ``packets`` and freeze the result."""

    config = config or default_config()
    packets = tuple(packets)
    return CaptureReport(
        file_name=file_name,
        statistics=statistics if statistics is not None else extract_statistics(packets),
        connections=tuple(reconstruct_connections(packets)),
        connection_issues=tuple(detect_connection_issues(packets)),
        throughput=tuple(calculate_throughput(packets, config.throughput.interval)),
        top_talkers=tuple(identify_top_talkers(packets, config.talkers.report_limit)),
        dns=analyze_dns(packets),
        security=tuple(SecurityScanner(config.security).scan(packets)),
    )


__all__ = ["CaptureReport", "build_report"]
