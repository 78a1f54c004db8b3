"""
Runtime Configuration Module

Provides configuration loading and logging setup for hashtree.
"""

from .runtime import (
    DigestConfig,
    LoggingConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
)
from .logging import setup_logging, setup_logging_from_config

__all__ = [
    "DigestConfig",
    "LoggingConfig",
    "TreeConfig",
    "get_default_config",
    "set_default_config",
    "setup_logging",
    "setup_logging_from_config",
]
