"""
flagkit/toolchain/resolver.py

Environment resolution - platform, pointer width and C++11 subset support.
"""

import logging
from dataclasses import dataclass

from packaging.version import InvalidVersion, Version

from ..core.platform import BuildSystemFacts, Bitness, OperatingSystem, PlatformIdentity
from .classifier import CompilerFamily, ToolchainIdentity

logger = logging.getLogger(__name__)

# GCC tokens strictly greater than this (as strings) ship a C++0x subset.
GCC_CXX11_THRESHOLD = "44"

# Visual Studio generation that introduced partial C++11 support (VS2010).
MSVC_CXX11_GENERATION = "10"


@dataclass(frozen=True)
class StandardSupport:
    """Whether the toolchain implements at least a subset of C++11."""

    has_cxx11_subset: bool


@dataclass(frozen=True)
class Resolution:
    """Output of EnvironmentResolver.resolve()."""

    platform: PlatformIdentity
    standard: StandardSupport
    is_ide_generator: bool


def resolve_os(system_name: str) -> OperatingSystem:
    """Exact match on Darwin and Linux; everything else is Windows."""
    if system_name == "Darwin":
        return OperatingSystem.DARWIN
    if system_name == "Linux":
        return OperatingSystem.LINUX
    return OperatingSystem.WINDOWS


def resolve_bits(pointer_size: int) -> Bitness:
    return Bitness.BITS64 if pointer_size == 8 else Bitness.BITS32


def has_cxx11_subset(identity: ToolchainIdentity) -> bool:
    """
    Decide C++11 subset availability.

    GCC-family tokens are compared as strings: '5' is greater than '44', but
    '10' (GCC 10.x) is not. This is kept as is; a warning is logged when a
    numeric comparison of the raw version would disagree.

    Args:
        identity: Classified toolchain

    Returns:
        True if a C++11 subset is available
    """
    if identity.family is CompilerFamily.GCC_COMPATIBLE:
        token = identity.version_token or ""
        supported = token > GCC_CXX11_THRESHOLD
        _warn_on_numeric_mismatch(identity.raw_version, supported)
        return supported
    if identity.family is CompilerFamily.MSVC:
        return identity.msvc_generation == MSVC_CXX11_GENERATION
    return False


def _warn_on_numeric_mismatch(raw_version, supported: bool):
    if not raw_version:
        return
    try:
        numeric = Version(raw_version.strip()) >= Version("4.5")
    except InvalidVersion:
        return
    if numeric != supported:
        logger.warning(
            f"Compiler version {raw_version} compares "
            f"{'below' if supported else 'above'} the C++11 threshold "
            f"numerically, but C++11 support is reported as {supported}"
        )


class EnvironmentResolver:
    """Derive platform identity and standard support from a toolchain."""

    def resolve(
        self, identity: ToolchainIdentity, facts: BuildSystemFacts
    ) -> Resolution:
        """
        Resolve the build environment.

        Args:
            identity: Classified toolchain
            facts: Build system facts (system name, pointer size)

        Returns:
            Resolution with platform, standard support and the IDE flag
        """
        platform_identity = PlatformIdentity(
            os=resolve_os(facts.system_name),
            bits=resolve_bits(facts.pointer_size),
        )
        logger.info(f"{platform_identity.bits.value}bit platform")

        cxx11 = has_cxx11_subset(identity)
        if cxx11:
            logger.info("C++11 support detected")

        return Resolution(
            platform=platform_identity,
            standard=StandardSupport(has_cxx11_subset=cxx11),
            is_ide_generator=identity.is_ide_generator,
        )
