"""Reporting utilities."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .pipeline import AnalysisSession, AnalyzedCapture
from .utils.io import ensure_dir, save_json
from .utils.netutils import bandwidth_bps, format_bandwidth, format_bytes, format_duration, packets_per_second, port_range, port_service


def format_summary(capture: AnalyzedCapture) -> str:
    """Return a compact CLI summary for a single capture."""

    stats = capture.statistics
    report = capture.report
    return " ".join(
        [
            f"[{capture.file_name}]",
            f"packets={stats.total_packets}",
            f"bytes={stats.total_bytes}",
            f"avg_size={stats.avg_packet_size}",
            f"protocols={len(stats.protocols)}",
            f"connections={len(report.connections)}",
            f"established={report.established_connections}",
            f"findings={len(report.security)}",
            f"parse_errors={len(capture.parse_errors)}",
        ]
    )


def report_file_name(index: int, file_name: str) -> str:
    """Per-capture JSON name; the batch position keeps same-named inputs apart."""

    return f"{index:02d}_{Path(file_name).stem}.json"


def _capture_section(capture: AnalyzedCapture) -> List[str]:
    stats = capture.statistics
    report = capture.report
    lines = [
        f"## {capture.file_name}",
        "",
        f"- **packets**: {stats.total_packets}",
        f"- **volume**: {format_bytes(stats.total_bytes)} (avg {stats.avg_packet_size} B/packet)",
        f"- **duration**: {format_duration(stats.duration)}",
        f"- **rate**: {packets_per_second(stats.total_packets, stats.duration):.2f} packets/s",
        f"- **bandwidth**: {format_bandwidth(bandwidth_bps(stats.total_bytes, stats.duration))}",
        f"- **average throughput**: {format_bandwidth(report.average_throughput * 8)}",
        f"- **connections**: {len(report.connections)} total, {report.established_connections} established, "
        f"{report.closed_connections} closed",
        f"- **DNS**: {report.dns.total_queries} queries, {len(report.dns.unique_domains)} domains",
    ]
    if capture.parse_errors:
        lines.append(f"- **parse errors**: {len(capture.parse_errors)}")
    if stats.protocols:
        lines += ["", "### Protocols", ""]
        for protocol, count in sorted(stats.protocols.items(), key=lambda item: item[1], reverse=True):
            lines.append(f"- {protocol}: {count}")
    if report.top_talkers:
        lines += ["", "### Top talkers", ""]
        for talker in report.top_talkers:
            lines.append(f"- {talker.address} ({talker.address_type}): {format_bytes(talker.total_bytes)}")
    if report.connections:
        lines += ["", "### Services", ""]
        services = {}
        for conn in report.connections:
            port = int(conn.destination_port)
            name = f"{port_service(port)} ({port_range(port)})"
            services[name] = services.get(name, 0) + 1
        for name, count in sorted(services.items(), key=lambda item: item[1], reverse=True):
            lines.append(f"- {name}: {count} connections")
    if report.security:
        lines += ["", "### Security findings", ""]
        for finding in report.security:
            lines.append(f"- **{finding.severity.value}** {finding.type}: {finding.description}")
    lines.append("")
    return lines


def write_session_report(out_dir: Path, session: AnalysisSession) -> List[Path]:
    """Persist per-capture JSON, the comparison and a Markdown summary."""

    ensure_dir(out_dir)
    written: List[Path] = []
    for index, capture in enumerate(session.captures):
        target = out_dir / report_file_name(index, capture.file_name)
        payload = capture.report.to_dict()
        payload["parse_errors"] = [error.to_dict() for error in capture.parse_errors]
        save_json(target, payload)
        written.append(target)

    summary_lines = ["# Capture Analysis Summary", ""]
    for capture in session.captures:
        summary_lines += _capture_section(capture)
    if session.comparison is not None:
        comparison_path = out_dir / "comparison.json"
        save_json(comparison_path, session.comparison.to_dict())
        written.append(comparison_path)
        summary_lines += ["## Comparison", ""]
        for heading, entries in (
            ("Similarities", session.comparison.similarities),
            ("Differences", session.comparison.differences),
            ("Inconsistencies", session.comparison.inconsistencies),
        ):
            summary_lines.append(f"### {heading}")
            summary_lines.append("")
            summary_lines += [f"- {entry.description}" for entry in entries] or ["- none"]
            summary_lines.append("")
    summary_path = out_dir / "summary.md"
    summary_path.write_text("\n".join(summary_lines), encoding="utf-8")
    written.append(summary_path)
    return written


__all__ = ["format_summary", "report_file_name", "write_session_report"]
