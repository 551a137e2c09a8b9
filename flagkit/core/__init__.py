"""
Core functionality for FlagKit.

This package contains the foundational modules that other components depend on.
"""

from .exceptions import (
    FlagKitError,
    ToolchainError,
    ProbeFailed,
    UnsupportedToolchain,
    FlagError,
    InvalidPlatformSelector,
    ConfigError,
    BuildConfigurationError,
)

from .platform import (
    OperatingSystem,
    Bitness,
    PlatformIdentity,
    BuildSystemFacts,
    describe_host,
)

__all__ = [
    "FlagKitError",
    "ToolchainError",
    "ProbeFailed",
    "UnsupportedToolchain",
    "FlagError",
    "InvalidPlatformSelector",
    "ConfigError",
    "BuildConfigurationError",
    "OperatingSystem",
    "Bitness",
    "PlatformIdentity",
    "BuildSystemFacts",
    "describe_host",
]
