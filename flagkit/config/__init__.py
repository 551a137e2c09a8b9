"""
Configuration module for FlagKit.
"""

from .parser import (
    CONFIG_FILENAME,
    CompilerConfig,
    FlagEntry,
    FlagKitConfig,
    parse_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "CompilerConfig",
    "FlagEntry",
    "FlagKitConfig",
    "parse_config",
]
