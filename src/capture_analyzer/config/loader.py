"""Configuration loader utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from .types import (
    ComparisonConfig,
    Config,
    LoggingConfig,
    PathsConfig,
    SecurityConfig,
    SessionConfig,
    TalkersConfig,
    ThroughputConfig,
    resolve_paths,
    validate,
)


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return value


def load_config(path: Path) -> Config:
    """Load a configuration file and return a :class:`Config`.

    Missing sections and keys fall back to the dataclass defaults.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    raw = _load_yaml(path)

    p = _section(raw, "paths")
    paths = PathsConfig(**{key: Path(value) for key, value in p.items()})

    security_payload = _section(raw, "security").copy()
    if "icmp_protocols" in security_payload:
        security_payload["icmp_protocols"] = tuple(security_payload["icmp_protocols"])

    config = Config(
        paths=paths,
        throughput=ThroughputConfig(**_section(raw, "throughput")),
        talkers=TalkersConfig(**_section(raw, "talkers")),
        security=SecurityConfig(**security_payload),
        comparison=ComparisonConfig(**_section(raw, "comparison")),
        session=SessionConfig(**_section(raw, "session")),
        logging=LoggingConfig(**_section(raw, "logging")),
    )
    return validate(resolve_paths(config, root=path.parent))


__all__ = ["load_config"]
