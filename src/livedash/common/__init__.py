"""Common utilities for the Live Data Dashboard."""

from livedash.common.config import Config, get_config

__all__ = [
    "Config",
    "get_config",
]
