"""
Runtime Configuration Module

Provides configuration loading and management for commitree.
"""

from .runtime import (
    RuntimeConfig,
    TreeConfig,
    OutputConfig,
    LoggingConfig,
    get_default_config,
    set_default_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "TreeConfig",
    "OutputConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
    "get_default_config_template",
]
