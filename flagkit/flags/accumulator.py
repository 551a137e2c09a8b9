"""
Flag accumulation state.

Flags are kept as ordered token lists per language and build type and are
only joined into strings at the CMake command-line boundary.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.platform import BuildSystemFacts

logger = logging.getLogger(__name__)


class Language(Enum):
    C = "C"
    CXX = "CXX"


class BuildType(Enum):
    DEBUG = "Debug"
    RELEASE = "Release"

    @classmethod
    def parse(cls, value) -> "BuildType":
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        raise ValueError(
            f"Invalid build type: {value}. Must be one of "
            f"{[m.value for m in cls]}"
        )


Slot = Tuple[Language, Optional[BuildType]]

SLOTS: Tuple[Slot, ...] = tuple(
    (language, build_type)
    for language in Language
    for build_type in (None, BuildType.DEBUG, BuildType.RELEASE)
)


def cmake_variable(language: Language, build_type: Optional[BuildType] = None) -> str:
    """
    CMake cache variable for a slot.

    Example:
        >>> cmake_variable(Language.CXX, BuildType.DEBUG)
        'CMAKE_CXX_FLAGS_DEBUG'
    """
    name = f"CMAKE_{language.value}_FLAGS"
    if build_type is not None:
        name += f"_{build_type.value.upper()}"
    return name


@dataclass(frozen=True)
class FlagSnapshot:
    """Immutable copy of every flag slot, taken before any mutation."""

    slots: Tuple[Tuple[Slot, Tuple[str, ...]], ...]

    def get(self, language: Language, build_type: Optional[BuildType] = None):
        return dict(self.slots)[(language, build_type)]

    def as_cmake(self) -> Dict[str, str]:
        return {cmake_variable(*slot): " ".join(tokens) for slot, tokens in self.slots}


class FlagAccumulator:
    """
    Mutable per-language, per-build-type flag lists plus definitions.

    Tokens are appended in call order and never deduplicated.
    """

    def __init__(self):
        self._flags: Dict[Slot, List[str]] = {slot: [] for slot in SLOTS}
        self._definitions: List[str] = []

    @classmethod
    def from_defaults(cls, defaults: Mapping[str, str]) -> "FlagAccumulator":
        """
        Seed slots from CMake variable names.

        Args:
            defaults: e.g. {'CMAKE_C_FLAGS': '-pipe', 'CMAKE_C_FLAGS_DEBUG': '-g'}

        Returns:
            New FlagAccumulator
        """
        accumulator = cls()
        for slot in SLOTS:
            value = defaults.get(cmake_variable(*slot))
            if value:
                accumulator._flags[slot] = value.split()
        return accumulator

    def append(
        self,
        language: Language,
        tokens: Iterable[str],
        build_type: Optional[BuildType] = None,
    ):
        self._flags[(language, build_type)].extend(tokens)

    def add_definition_token(self, token: str):
        self._definitions.append(token)

    def flags(
        self, language: Language, build_type: Optional[BuildType] = None
    ) -> List[str]:
        return list(self._flags[(language, build_type)])

    def flag_string(
        self, language: Language, build_type: Optional[BuildType] = None
    ) -> str:
        return " ".join(self._flags[(language, build_type)])

    @property
    def definitions(self) -> List[str]:
        return list(self._definitions)

    def snapshot(self) -> FlagSnapshot:
        return FlagSnapshot(
            slots=tuple((slot, tuple(self._flags[slot])) for slot in SLOTS)
        )

    def restore(self, snapshot: FlagSnapshot):
        """Replace every flag slot wholesale. Definitions are kept."""
        for slot, tokens in snapshot.slots:
            self._flags[slot] = list(tokens)

    def __repr__(self) -> str:
        return (
            f"FlagAccumulator(flags={self._flags!r}, "
            f"definitions={self._definitions!r})"
        )


def restore_defaults(accumulator: FlagAccumulator, snapshot: FlagSnapshot):
    """
    Reset all flag slots to the pristine snapshot.

    Used before adding externally authored code that must not inherit the
    project-wide warning flags. Preprocessor definitions are not touched.

    Args:
        accumulator: Accumulator to reset
        snapshot: Snapshot captured at first resolution
    """
    logger.debug("Restoring default compiler flags")
    accumulator.restore(snapshot)


# Stock CMake defaults for the two command-line conventions.
_GCC_STYLE_DEFAULTS = {
    "CMAKE_C_FLAGS_DEBUG": "-g",
    "CMAKE_CXX_FLAGS_DEBUG": "-g",
    "CMAKE_C_FLAGS_RELEASE": "-O3 -DNDEBUG",
    "CMAKE_CXX_FLAGS_RELEASE": "-O3 -DNDEBUG",
}

_MSVC_STYLE_DEFAULTS = {
    "CMAKE_C_FLAGS": "/DWIN32 /D_WINDOWS /W3",
    "CMAKE_CXX_FLAGS": "/DWIN32 /D_WINDOWS /W3 /GR /EHsc",
    "CMAKE_C_FLAGS_DEBUG": "/MDd /Zi /Ob0 /Od /RTC1",
    "CMAKE_CXX_FLAGS_DEBUG": "/MDd /Zi /Ob0 /Od /RTC1",
    "CMAKE_C_FLAGS_RELEASE": "/MD /O2 /Ob2 /DNDEBUG",
    "CMAKE_CXX_FLAGS_RELEASE": "/MD /O2 /Ob2 /DNDEBUG",
}


def toolchain_defaults(
    facts: BuildSystemFacts, overrides: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Default flag strings before any project additions.

    Stock values follow the generator's command-line convention; base flags
    come from CFLAGS/CXXFLAGS like CMake does, and explicit overrides win.

    Args:
        facts: Build system facts
        overrides: Optional mapping of CMake variable name to flag string

    Returns:
        Mapping of CMake variable name to flag string
    """
    if facts.uses_msvc_conventions:
        defaults = dict(_MSVC_STYLE_DEFAULTS)
    else:
        defaults = dict(_GCC_STYLE_DEFAULTS)

    for variable, env_name in (("CMAKE_C_FLAGS", "CFLAGS"), ("CMAKE_CXX_FLAGS", "CXXFLAGS")):
        env_value = os.environ.get(env_name)
        if env_value:
            defaults[variable] = env_value

    if overrides:
        defaults.update(overrides)
    return defaults
