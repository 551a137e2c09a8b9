"""
Platform-conditioned flag and definition composition.

Example:
    ```python
    composer = FlagComposer(cache.ensure_resolved(), accumulator)
    composer.add_definition("NO_DEBUG")
    composer.add_flag("GCC", "-Wall", "-Werror")
    composer.add_cxx_flag(PlatformSelector.MSVC, "/EHsc")
    ```
"""

import logging
from enum import Enum
from typing import Dict, Optional, Sequence, Union

from ..core.exceptions import InvalidPlatformSelector
from ..toolchain.cache import ResolvedEnvironment
from ..toolchain.classifier import CompilerFamily
from .accumulator import (
    SLOTS,
    BuildType,
    FlagAccumulator,
    Language,
    cmake_variable,
    restore_defaults,
)

logger = logging.getLogger(__name__)


class PlatformSelector(Enum):
    """Which compilers a flag applies to."""

    GCC = "GCC"
    CLANG = "CLANG"
    MSVC = "MSVC"
    ALL = "ALL"

    @classmethod
    def parse(cls, value) -> "PlatformSelector":
        """
        Accept a selector or its case-insensitive name.

        Raises:
            InvalidPlatformSelector: For anything else
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                pass
        raise InvalidPlatformSelector(value)


SelectorLike = Union[PlatformSelector, str]


class FlagComposer:
    """Accumulate flags and definitions for the resolved toolchain."""

    def __init__(
        self,
        environment: ResolvedEnvironment,
        accumulator: FlagAccumulator,
        build_date: str = "",
    ):
        self.environment = environment
        self.accumulator = accumulator
        self.build_date = build_date

    def matches(self, selector: SelectorLike) -> bool:
        """
        Check whether selector applies to the resolved toolchain.

        Raises:
            InvalidPlatformSelector: If selector is not GCC|CLANG|MSVC|ALL
        """
        selector = PlatformSelector.parse(selector)
        family = self.environment.toolchain.family

        if selector is PlatformSelector.ALL:
            return True
        if selector is PlatformSelector.CLANG:
            return self.environment.is_clang
        if selector is PlatformSelector.GCC:
            return family is CompilerFamily.GCC_COMPATIBLE
        if selector is PlatformSelector.MSVC:
            return family is CompilerFamily.MSVC
        raise InvalidPlatformSelector(selector)

    def add_definition(self, *names: str):
        """
        Add preprocessor definitions in the toolchain's syntax.

        Example:
            add_definition("FOO", "BAR=2") -> '-DFOO -DBAR=2' on GCC,
            '/DFOO /DBAR=2' on MSVC
        """
        family = self.environment.toolchain.family
        for name in names:
            if family is CompilerFamily.GCC_COMPATIBLE:
                token = f"-D{name}"
            elif family is CompilerFamily.MSVC:
                token = f"/D{name}"
            else:
                continue
            self.accumulator.add_definition_token(token)
            logger.debug(f"Adding definition {token}")

    def add_flag(
        self,
        selector: SelectorLike,
        *flags: str,
        build_type: Optional[BuildType] = None,
    ):
        """Add flags for both C and C++ when selector matches."""
        self._add(selector, (Language.CXX, Language.C), flags, build_type)

    def add_cxx_flag(
        self,
        selector: SelectorLike,
        *flags: str,
        build_type: Optional[BuildType] = None,
    ):
        """Add C++-only flags when selector matches."""
        self._add(selector, (Language.CXX,), flags, build_type)

    def add_c_flag(
        self,
        selector: SelectorLike,
        *flags: str,
        build_type: Optional[BuildType] = None,
    ):
        """Add C-only flags when selector matches."""
        self._add(selector, (Language.C,), flags, build_type)

    def _add(
        self,
        selector: SelectorLike,
        languages: Sequence[Language],
        flags: Sequence[str],
        build_type: Optional[BuildType],
    ):
        if not self.matches(selector):
            logger.debug(
                f"Skipping flags {' '.join(flags)}, needs platform "
                f"{PlatformSelector.parse(selector).value}"
            )
            return

        if build_type is not None:
            build_type = BuildType.parse(build_type)
        for language in languages:
            self.accumulator.append(language, flags, build_type)
        for flag in flags:
            logger.debug(f"Adding flag {flag}")

    def restore_defaults(self):
        """Reset all flag slots to the environment's captured defaults."""
        restore_defaults(self.accumulator, self.environment.defaults)

    def cmake_definitions(self) -> Dict[str, str]:
        """
        Render the final CMake cache variables.

        Definitions are appended to the two base slots here, so resetting
        the flags never drops them.

        Returns:
            Mapping such as {'CMAKE_CXX_FLAGS': '-Wall -DFOO', ...}
        """
        definitions = self.accumulator.definitions
        rendered = {}
        for language, build_type in SLOTS:
            tokens = self.accumulator.flags(language, build_type)
            if build_type is None:
                tokens += definitions
            rendered[cmake_variable(language, build_type)] = " ".join(tokens)
        return rendered
