"""Differencing of two or more capture reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config.types import ComparisonConfig
from ..data.structures import SecurityFinding, Severity
from ..utils.logging import get_logger
from .report import CaptureReport

logger = get_logger(__name__)


@dataclass(frozen=True)
class ComparisonEntry:
    """One similarity, difference or inconsistency."""

    type: str
    description: str
    captures: Tuple[int, ...]
    file_names: Tuple[str, ...]
    severity: Optional[Severity] = None
    protocol: Optional[str] = None
    addresses: Tuple[str, ...] = ()
    details: Tuple[Dict[str, Any], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type,
            "description": self.description,
            "captures": list(self.captures),
            "file_names": list(self.file_names),
        }
        if self.severity is not None:
            payload["severity"] = self.severity.value
        if self.protocol is not None:
            payload["protocol"] = self.protocol
        if self.addresses:
            payload["ips"] = list(self.addresses)
        if self.details:
            payload["details"] = [dict(detail) for detail in self.details]
        return payload


@dataclass(frozen=True)
class TaggedFinding:
    """A security finding labelled with the capture it came from."""

    capture_index: int
    file_name: str
    finding: SecurityFinding

    def to_dict(self) -> Dict[str, Any]:
        payload = self.finding.to_dict()
        payload["capture_index"] = self.capture_index
        payload["file_name"] = self.file_name
        return payload


@dataclass(frozen=True)
class ComparisonResult:
    total_logs: int
    total_packets: int
    protocols: Tuple[str, ...]
    sources: Tuple[str, ...]
    destinations: Tuple[str, ...]
    similarities: Tuple[ComparisonEntry, ...] = field(default_factory=tuple)
    differences: Tuple[ComparisonEntry, ...] = field(default_factory=tuple)
    inconsistencies: Tuple[ComparisonEntry, ...] = field(default_factory=tuple)
    security_issues: Tuple[TaggedFinding, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_logs": self.total_logs,
            "summary": {
                "total_packets": self.total_packets,
                "unique_protocols": list(self.protocols),
                "unique_sources": list(self.sources),
                "unique_destinations": list(self.destinations),
            },
            "similarities": [entry.to_dict() for entry in self.similarities],
            "differences": [entry.to_dict() for entry in self.differences],
            "inconsistencies": [entry.to_dict() for entry in self.inconsistencies],
            "security_issues": [issue.to_dict() for issue in self.security_issues],
        }


def _union(groups: Sequence[Sequence[str]]) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for group in groups:
        seen.update(dict.fromkeys(group))
    return tuple(seen)


class CaptureComparator:
    """Stateless cross-capture comparison."""

    def __init__(self, config: ComparisonConfig | None = None) -> None:
        self.config = config or ComparisonConfig()

    def compare(self, reports: Sequence[CaptureReport]) -> ComparisonResult:
        if len(reports) < 2:
            raise ValueError("Comparison needs at least two captures")
        names = tuple(report.file_name for report in reports)
        indices = tuple(range(len(reports)))

        protocols = _union([list(report.statistics.protocols) for report in reports])
        similarities, differences = self._classify_protocols(reports, protocols, names)
        common = self._common_sources(reports, names)
        if common is not None:
            similarities.append(common)

        result = ComparisonResult(
            total_logs=len(reports),
            total_packets=sum(report.statistics.total_packets for report in reports),
            protocols=protocols,
            sources=_union([list(report.statistics.sources) for report in reports]),
            destinations=_union([list(report.statistics.destinations) for report in reports]),
            similarities=tuple(similarities),
            differences=tuple(differences),
            inconsistencies=tuple(self._inconsistencies(reports, names)),
            security_issues=tuple(
                TaggedFinding(capture_index=idx, file_name=names[idx], finding=finding)
                for idx in indices
                for finding in reports[idx].security
            ),
        )
        logger.info(
            "comparison_built",
            captures=len(reports),
            similarities=len(result.similarities),
            differences=len(result.differences),
            inconsistencies=len(result.inconsistencies),
        )
        return result

    def _classify_protocols(
        self,
        reports: Sequence[CaptureReport],
        protocols: Sequence[str],
        names: Tuple[str, ...],
    ) -> Tuple[List[ComparisonEntry], List[ComparisonEntry]]:
        similarities: List[ComparisonEntry] = []
        differences: List[ComparisonEntry] = []
        for protocol in protocols:
            counts = [report.statistics.protocols.get(protocol, 0) for report in reports]
            present = tuple(idx for idx, count in enumerate(counts) if count > 0)
            details = tuple(
                {"capture_index": idx, "file_name": names[idx], "count": count} for idx, count in enumerate(counts)
            )
            if len(present) == len(reports):
                similarities.append(
                    ComparisonEntry(
                        type="protocol",
                        protocol=protocol,
                        description=f"All files contain {protocol} traffic",
                        captures=present,
                        file_names=tuple(names[idx] for idx in present),
                        details=details,
                    )
                )
            elif present:
                differences.append(
                    ComparisonEntry(
                        type="protocol",
                        protocol=protocol,
                        description=f"{protocol} traffic only present in some files",
                        captures=present,
                        file_names=tuple(names[idx] for idx in present),
                        details=details,
                    )
                )
        return similarities, differences

    def _common_sources(self, reports: Sequence[CaptureReport], names: Tuple[str, ...]) -> Optional[ComparisonEntry]:
        shared = set(reports[0].statistics.sources)
        for report in reports[1:]:
            shared &= set(report.statistics.sources)
        if not shared:
            return None
        ordered = tuple(source for source in reports[0].statistics.sources if source in shared)
        return ComparisonEntry(
            type="common_sources",
            description=f"{len(ordered)} source IPs appear in all files",
            captures=tuple(range(len(reports))),
            file_names=names,
            addresses=ordered,
        )

    def _inconsistencies(self, reports: Sequence[CaptureReport], names: Tuple[str, ...]) -> List[ComparisonEntry]:
        entries: List[ComparisonEntry] = []
        sizes = [report.statistics.avg_packet_size for report in reports]
        # An average of 0 (no packets, or only zero-length ones) says nothing about size.
        sized = [size for size in sizes if size > 0]
        if len(sized) >= 2 and max(sized) / min(sized) > self.config.size_ratio_threshold:
            entries.append(
                ComparisonEntry(
                    type="packet_size",
                    severity=Severity.MEDIUM,
                    description="Significant difference in average packet sizes between files",
                    captures=tuple(range(len(reports))),
                    file_names=names,
                    details=tuple(
                        {"capture_index": idx, "file_name": names[idx], "avg_size": size}
                        for idx, size in enumerate(sizes)
                    ),
                )
            )
        for idx, report in enumerate(reports):
            duration = report.statistics.duration
            if duration < self.config.min_duration:
                entries.append(
                    ComparisonEntry(
                        type="duration",
                        severity=Severity.LOW,
                        description=f"{names[idx]} has very short capture duration ({duration:.2f}s)",
                        captures=(idx,),
                        file_names=(names[idx],),
                        details=({"capture_index": idx, "file_name": names[idx], "duration": duration},),
                    )
                )
        return entries


def compare(reports: Sequence[CaptureReport], config: ComparisonConfig | None = None) -> ComparisonResult:
    return CaptureComparator(config).compare(reports)


__all__ = ["CaptureComparator", "ComparisonEntry", "ComparisonResult", "TaggedFinding", "compare"]
