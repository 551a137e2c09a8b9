"""
flagkit/toolchain/cache.py

Run-once resolution of the toolchain environment.

The cache is an explicit service: create one per configuration run and pass
the resolved environment to whoever needs it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.exceptions import FlagKitError
from ..core.platform import Bitness, BuildSystemFacts, OperatingSystem, PlatformIdentity
from ..flags.accumulator import FlagAccumulator, FlagSnapshot, restore_defaults
from .classifier import ToolchainClassifier, ToolchainIdentity
from .resolver import EnvironmentResolver, StandardSupport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedEnvironment:
    """
    Everything known about the active toolchain after resolution.

    Attributes:
        toolchain: Classified toolchain
        platform: Target OS and pointer width
        standard: C++11 subset support
        defaults: Flag slots as they were before the first mutation
    """

    toolchain: ToolchainIdentity
    platform: PlatformIdentity
    standard: StandardSupport
    defaults: FlagSnapshot

    @property
    def is_gcc(self) -> bool:
        return self.toolchain.is_gcc

    @property
    def is_msvc(self) -> bool:
        return self.toolchain.is_msvc

    @property
    def is_clang(self) -> bool:
        return self.toolchain.is_clang

    @property
    def is_xcode(self) -> bool:
        return self.toolchain.is_ide_generator

    @property
    def has_cxx11(self) -> bool:
        return self.standard.has_cxx11_subset

    @property
    def os(self) -> OperatingSystem:
        return self.platform.os

    @property
    def bits(self) -> Bitness:
        return self.platform.bits

    def as_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for display or JSON output.

        Returns:
            Dictionary representation
        """
        return {
            "family": self.toolchain.family.value,
            "version_token": self.toolchain.version_token,
            "raw_version": self.toolchain.raw_version,
            "msvc_generation": self.toolchain.msvc_generation,
            "is_clang": self.is_clang,
            "is_xcode": self.is_xcode,
            "os": self.os.value,
            "bits": self.bits.value,
            "has_cxx11": self.has_cxx11,
            "defaults": self.defaults.as_cmake(),
        }


class ResolutionCache:
    """
    Resolve the environment exactly once per configuration run.

    Example:
        >>> cache = ResolutionCache(facts, accumulator)
        >>> env = cache.ensure_resolved()
        >>> env is cache.ensure_resolved()
        True
    """

    def __init__(
        self,
        facts: BuildSystemFacts,
        accumulator: FlagAccumulator,
        classifier: Optional[ToolchainClassifier] = None,
        resolver: Optional[EnvironmentResolver] = None,
    ):
        self.facts = facts
        self.accumulator = accumulator
        self.classifier = classifier or ToolchainClassifier()
        self.resolver = resolver or EnvironmentResolver()
        self._has_run = False
        self._environment: Optional[ResolvedEnvironment] = None

    @property
    def has_run(self) -> bool:
        return self._has_run

    @property
    def environment(self) -> ResolvedEnvironment:
        if self._environment is None:
            raise FlagKitError("Toolchain environment has not been resolved yet")
        return self._environment

    def ensure_resolved(self) -> ResolvedEnvironment:
        """
        Resolve on first call; return the stored environment afterwards.

        The flag defaults are captured before detection so that later
        additions never leak into the snapshot.

        Returns:
            The ResolvedEnvironment for this run

        Raises:
            ProbeFailed: If the primary compiler probe fails
            UnsupportedToolchain: If the compiler convention is unknown
        """
        if self._has_run:
            return self.environment

        logger.info("Running compiler detection")
        defaults = self.accumulator.snapshot()

        identity = self.classifier.classify(self.facts)
        resolution = self.resolver.resolve(identity, self.facts)

        self._environment = ResolvedEnvironment(
            toolchain=identity,
            platform=resolution.platform,
            standard=resolution.standard,
            defaults=defaults,
        )
        self._has_run = True
        logger.debug(f"Resolved environment: {self._environment.as_dict()}")
        return self._environment

    def restore_defaults(self):
        """Reset the accumulator's flags to the captured defaults."""
        restore_defaults(self.accumulator, self.environment.defaults)
