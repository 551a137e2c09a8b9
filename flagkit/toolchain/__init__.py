"""
Toolchain detection module for FlagKit.

This module provides functionality for:
- Compiler interrogation
- Toolchain family classification
- Platform and standard support resolution
- Run-once caching of the resolved environment
"""

from flagkit.toolchain.probe import ProcessProbe
from flagkit.toolchain.classifier import (
    CompilerFamily,
    ToolchainIdentity,
    ToolchainClassifier,
    normalize_version,
    msvc_generation_from_banner,
)
from flagkit.toolchain.resolver import (
    EnvironmentResolver,
    Resolution,
    StandardSupport,
    has_cxx11_subset,
)
from flagkit.toolchain.cache import ResolutionCache, ResolvedEnvironment

__all__ = [
    "ProcessProbe",
    "CompilerFamily",
    "ToolchainIdentity",
    "ToolchainClassifier",
    "normalize_version",
    "msvc_generation_from_banner",
    "EnvironmentResolver",
    "Resolution",
    "StandardSupport",
    "has_cxx11_subset",
    "ResolutionCache",
    "ResolvedEnvironment",
]
