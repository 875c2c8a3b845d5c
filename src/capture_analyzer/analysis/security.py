"""Heuristic security scans over one capture."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence, Set

from ..config.types import SecurityConfig
from ..data.structures import PacketRecord, SecurityFinding, Severity
from ..utils.logging import get_logger
from . import flags

logger = get_logger(__name__)


class SecurityScanner:
    """Run the port-scan, ICMP volume and retransmission scans.

    Scans are independent and stateless; findings come out in scan order, and
    within a scan in order of first appearance of the offending address or
    protocol.
    """

    def __init__(self, config: SecurityConfig | None = None) -> None:
        self.config = config or SecurityConfig()

    def scan(self, packets: Sequence[PacketRecord]) -> List[SecurityFinding]:
        findings = self.port_scans(packets) + self.icmp_volume(packets) + self.retransmission_storms(packets)
        if findings:
            logger.info("security_findings", count=len(findings), types=sorted({f.type for f in findings}))
        return findings

    def port_scans(self, packets: Sequence[PacketRecord]) -> List[SecurityFinding]:
        ports_by_source: Dict[str, Set[str]] = {}
        for packet in packets:
            if packet.protocol != "TCP" or not flags.has_syn(packet.info):
                continue
            ports = ports_by_source.setdefault(packet.source, set())
            port = flags.destination_port(packet.info)
            if port is not None:
                ports.add(port)
        return [
            SecurityFinding(
                type="Potential Port Scan",
                severity=Severity.HIGH,
                source=source,
                description=f"Source IP scanned {len(ports)} different ports",
                metric="ports_scanned",
                value=len(ports),
            )
            for source, ports in ports_by_source.items()
            if len(ports) > self.config.port_scan_threshold
        ]

    def icmp_volume(self, packets: Sequence[PacketRecord]) -> List[SecurityFinding]:
        counts = Counter(packet.protocol for packet in packets)
        return [
            SecurityFinding(
                type="High ICMP Traffic",
                severity=Severity.MEDIUM,
                protocol=protocol,
                description=f"Detected {count} {protocol} packets, could indicate network scanning or DDoS",
                metric="packet_count",
                value=count,
            )
            for protocol, count in counts.items()
            if protocol in self.config.icmp_protocols and count > self.config.icmp_threshold
        ]

    def retransmission_storms(self, packets: Sequence[PacketRecord]) -> List[SecurityFinding]:
        retransmitted = [packet for packet in packets if flags.is_retransmission(packet.info)]
        if len(retransmitted) <= self.config.retransmission_min_total:
            return []
        per_destination = Counter(packet.destination for packet in retransmitted)
        return [
            SecurityFinding(
                type="Multiple Failed Connections",
                severity=Severity.MEDIUM,
                destination=destination,
                description=f"{count} retransmissions to {destination}, service may be unreachable",
                metric="retransmission_count",
                value=count,
            )
            for destination, count in per_destination.items()
            if count > self.config.retransmission_per_destination
        ]


def detect_security_issues(packets: Sequence[PacketRecord], config: SecurityConfig | None = None) -> List[SecurityFinding]:
    return SecurityScanner(config).scan(packets)


__all__ = ["SecurityScanner", "detect_security_issues"]
