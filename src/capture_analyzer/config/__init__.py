"""Configuration helpers."""

from .loader import load_config
from .types import Config, default_config

__all__ = ["Config", "default_config", "load_config"]
