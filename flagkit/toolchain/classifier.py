"""
flagkit/toolchain/classifier.py

Toolchain classification - decides which compiler convention is active.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.exceptions import ProbeFailed, UnsupportedToolchain
from ..core.platform import BuildSystemFacts
from .probe import ProcessProbe

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"([0-9])\.([0-9])(\.[0-9])?")
_NUMERIC_TOKEN = re.compile(r"[0-9]+(?:\.[0-9]+)*")
_CL_BANNER_VERSION = re.compile(r"Version\s+([0-9]+)\.([0-9]+)")


class CompilerFamily(Enum):
    """Primary compiler convention. Clang is a secondary tag, not a family."""

    GCC_COMPATIBLE = "gcc"
    MSVC = "msvc"


@dataclass(frozen=True)
class ToolchainIdentity:
    """
    Classified toolchain.

    Attributes:
        family: Primary compiler family
        version_token: Two-digit normalized version (GCC family only)
        raw_version: Version text reported by the compiler
        is_clang: Compiler identifies itself as clang
        is_ide_generator: Configuring for the Xcode IDE (GCC family only)
        msvc_generation: Visual Studio generation marker (MSVC only)
    """

    family: CompilerFamily
    version_token: Optional[str] = None
    raw_version: Optional[str] = None
    is_clang: bool = False
    is_ide_generator: bool = False
    msvc_generation: Optional[str] = None

    @property
    def is_gcc(self) -> bool:
        return self.family is CompilerFamily.GCC_COMPATIBLE

    @property
    def is_msvc(self) -> bool:
        return self.family is CompilerFamily.MSVC

    def __str__(self) -> str:
        name = "clang" if self.is_clang else self.family.value
        if self.is_gcc:
            return f"{name} {self.raw_version} (token {self.version_token})"
        return f"{name} generation {self.msvc_generation}"


def normalize_version(raw: str) -> str:
    """
    Collapse a dumped compiler version to its two leading digits.

    The first numeric token is matched against ``d.d(.d)?``; when the token
    has a multi-digit major the two leading digits are used instead.

    Args:
        raw: Output of ``-dumpversion`` (or any text containing a version)

    Returns:
        Version token, e.g. '4.8.1' -> '48', '10.2.1' -> '10', '5' -> '5'

    Raises:
        ProbeFailed: If the text contains no version number
    """
    token = _NUMERIC_TOKEN.search(raw)
    if not token:
        raise ProbeFailed("-dumpversion", f"unrecognized version '{raw}'")

    text = token.group(0)
    match = _VERSION_PATTERN.match(text)
    if match:
        return match.group(1) + match.group(2)
    return "".join(c for c in text if c.isdigit())[:2]


def msvc_generation_from_banner(banner: str) -> Optional[str]:
    """
    Map a cl.exe banner to its Visual Studio generation marker.

    Example:
        'Microsoft (R) C/C++ Optimizing Compiler Version 16.00.40219.01' -> '10'
    """
    match = _CL_BANNER_VERSION.search(banner)
    if not match:
        return None

    major, minor = int(match.group(1)), int(match.group(2))
    if major < 19:
        return str(major - 6)
    if minor < 10:
        return "14"
    if minor < 20:
        return "15"
    if minor < 30:
        return "16"
    return "17"


class ToolchainClassifier:
    """
    Classify the active compiler from probe output.

    GCC-compatible is tried first (Unix hosts and MinGW), then MSVC. Anything
    else is unsupported. Clang is tagged afterwards from ``--version``.
    """

    def __init__(self, probe: Optional[ProcessProbe] = None):
        self.probe = probe or ProcessProbe()

    def classify(self, facts: BuildSystemFacts) -> ToolchainIdentity:
        """
        Classify the toolchain described by facts.

        Args:
            facts: Build system facts (compiler path, system, generator)

        Returns:
            ToolchainIdentity

        Raises:
            ProbeFailed: If the version dump of a GCC-compatible compiler fails
            UnsupportedToolchain: If no known convention matches
        """
        if facts.is_unix_like:
            logger.info("GCC compatible compiler found")
            raw = self.probe.probe(facts.cxx_compiler, ["-dumpversion"])
            token = normalize_version(raw)
            logger.debug(f"Compiler version {raw} normalized to {token}")

            ide = facts.generator == "Xcode"
            if ide:
                logger.info("Found active XCode generator")

            return ToolchainIdentity(
                family=CompilerFamily.GCC_COMPATIBLE,
                version_token=token,
                raw_version=raw,
                is_clang=self._is_clang(facts),
                is_ide_generator=ide,
            )

        generation = self._msvc_generation(facts)
        if generation is not None:
            logger.info("Microsoft Visual Studio Compiler found")
            return ToolchainIdentity(
                family=CompilerFamily.MSVC,
                msvc_generation=generation or None,
                is_clang=self._is_clang(facts),
            )

        raise UnsupportedToolchain(facts.system_name, facts.cxx_compiler)

    def _msvc_generation(self, facts: BuildSystemFacts) -> Optional[str]:
        """Return the generation marker, '' if unknown, None if not MSVC."""
        if facts.is_visual_studio_generator:
            return facts.msvc_generation

        try:
            banner = self.probe.probe(facts.cxx_compiler)
        except ProbeFailed as e:
            logger.debug(f"No MSVC front end: {e}")
            return None

        if "Microsoft" not in banner:
            return None
        return msvc_generation_from_banner(banner) or ""

    def _is_clang(self, facts: BuildSystemFacts) -> bool:
        try:
            output = self.probe.probe(facts.cxx_compiler, ["--version"])
        except ProbeFailed as e:
            logger.debug(f"Clang check skipped: {e}")
            return False

        if "clang" in output:
            logger.info("compiler is clang")
            return True
        return False
