"""Configuration and credentials."""

from .store import ConfigStore, default_home
from .types import Config, Credentials, DifficultyRange, format_duration

__all__ = [
    "Config",
    "ConfigStore",
    "Credentials",
    "DifficultyRange",
    "default_home",
    "format_duration",
]
