# src/capture_analyzer/config/types.py

"""Configuration dataclasses and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Sequence


@dataclass
class PathsConfig:
    """Filesystem paths used by the CLI."""

    reports_dir: Path = Path("reports")


@dataclass
class ThroughputConfig:
    """Bucket width used for report throughput series."""

    interval: float = 5.0


@dataclass
class TalkersConfig:
    """How many talkers a report keeps."""

    report_limit: int = 5


@dataclass
class SecurityConfig:
    """Thresholds for the security heuristics."""

    port_scan_threshold: int = 20
    icmp_protocols: Sequence[str] = ("ICMP", "ICMPv6")
    icmp_threshold: int = 50
    retransmission_min_total: int = 10
    retransmission_per_destination: int = 5


@dataclass
class ComparisonConfig:
    """Thresholds for cross-capture inconsistency checks."""

    size_ratio_threshold: float = 2.0
    min_duration: float = 1.0


@dataclass
class SessionConfig:
    """Limits for one analysis session."""

    max_files: int = 10


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class Config:
    """Root configuration object."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    throughput: ThroughputConfig = field(default_factory=ThroughputConfig)
    talkers: TalkersConfig = field(default_factory=TalkersConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    comparison: ComparisonConfig = field(default_factory=ComparisonConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> Config:
    """Return the built-in configuration."""

    return Config()


def resolve_paths(config: Config, root: Path) -> Config:
    """Resolve relative paths against ``root``."""

    reports_dir = config.paths.reports_dir
    if not reports_dir.is_absolute():
        reports_dir = (root / reports_dir).resolve()
    return replace(config, paths=PathsConfig(reports_dir=reports_dir))


def validate(config: Config) -> Config:
    """Reject settings the pipeline cannot work with."""

    if config.throughput.interval <= 0:
        raise ValueError("throughput.interval must be positive")
    if config.talkers.report_limit < 1:
        raise ValueError("talkers.report_limit must be at least 1")
    if config.session.max_files < 1:
        raise ValueError("session.max_files must be at least 1")
    if config.comparison.size_ratio_threshold <= 0:
        raise ValueError("comparison.size_ratio_threshold must be positive")
    return config
