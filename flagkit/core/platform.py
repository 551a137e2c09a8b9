"""
Platform facts for FlagKit.

This module holds the platform identity types and the facts reported by the
build system (system name, processor, pointer size, generator, compilers)
from which the toolchain environment is resolved.

Usage:
    from flagkit.core.platform import BuildSystemFacts

    facts = BuildSystemFacts.from_host(generator="Ninja")
    print(facts.system_name, facts.pointer_size)
"""

import os
import platform
import re
import shutil
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import distro


class OperatingSystem(Enum):
    """Target operating system."""

    DARWIN = "Darwin"
    LINUX = "Linux"
    WINDOWS = "Windows"


class Bitness(Enum):
    """Target pointer width."""

    BITS32 = 32
    BITS64 = 64


@dataclass(frozen=True)
class PlatformIdentity:
    """
    Target platform the build is configured for.

    Attributes:
        os: Target operating system
        bits: Target pointer width
    """

    os: OperatingSystem
    bits: Bitness

    @property
    def is_64bit(self) -> bool:
        return self.bits is Bitness.BITS64

    @property
    def is_32bit(self) -> bool:
        return self.bits is Bitness.BITS32

    def __str__(self) -> str:
        return f"{self.os.value}-{self.bits.value}bit"


_VS_GENERATOR = re.compile(r"^Visual Studio (\d+)")


@dataclass(frozen=True)
class BuildSystemFacts:
    """
    What the build system reports about the configuration being run.

    Attributes:
        system_name: Reported OS name (e.g., 'Linux', 'Darwin', 'Windows')
        system_processor: Reported processor (e.g., 'x86_64')
        pointer_size: Size of a pointer in bytes (4 or 8)
        generator: Active project generator (e.g., 'Unix Makefiles', 'Xcode')
        cxx_compiler: C++ compiler executable
        c_compiler: C compiler executable
    """

    system_name: str
    system_processor: str
    pointer_size: int
    generator: str
    cxx_compiler: str
    c_compiler: str

    @classmethod
    def from_host(
        cls,
        generator: str,
        cxx_compiler: Optional[str] = None,
        c_compiler: Optional[str] = None,
    ) -> "BuildSystemFacts":
        """
        Collect facts from the running host.

        Compilers default to the CXX/CC environment variables, then to the
        platform's conventional driver names.

        Args:
            generator: Project generator name
            cxx_compiler: Optional C++ compiler override
            c_compiler: Optional C compiler override

        Returns:
            BuildSystemFacts for this host
        """
        system_name = platform.system()
        windows = system_name == "Windows"

        if not cxx_compiler:
            cxx_compiler = os.environ.get("CXX") or _default_compiler(
                "cl" if windows else "c++"
            )
        if not c_compiler:
            c_compiler = os.environ.get("CC") or _default_compiler(
                "cl" if windows else "cc"
            )

        return cls(
            system_name=system_name,
            system_processor=platform.machine(),
            pointer_size=struct.calcsize("P"),
            generator=generator,
            cxx_compiler=cxx_compiler,
            c_compiler=c_compiler,
        )

    @property
    def is_mingw(self) -> bool:
        """True when a MinGW/MSYS toolchain is in use."""
        if "MinGW" in self.generator or "MSYS" in self.generator:
            return True
        return "mingw" in self.cxx_compiler.lower()

    @property
    def is_unix_like(self) -> bool:
        """True when the generic Unix toolchain convention applies."""
        return self.system_name != "Windows" or self.is_mingw

    @property
    def is_visual_studio_generator(self) -> bool:
        return bool(_VS_GENERATOR.match(self.generator))

    @property
    def uses_msvc_conventions(self) -> bool:
        """True when the generator drives an MSVC-style command line."""
        return self.is_visual_studio_generator or self.generator.startswith("NMake")

    @property
    def msvc_generation(self) -> Optional[str]:
        """
        Visual Studio generation marker from the generator name.

        Example:
            'Visual Studio 10 2010' -> '10'
        """
        match = _VS_GENERATOR.match(self.generator)
        return match.group(1) if match else None


def _default_compiler(name: str) -> str:
    found = shutil.which(name)
    return found if found else name


def describe_host() -> str:
    """
    One-line description of the host for diagnostics.

    Returns:
        e.g. 'Linux 6.1.0 x86_64 (ubuntu 22.04)'
    """
    parts = [platform.system(), platform.release(), platform.machine()]
    if platform.system() == "Linux":
        dist_id = distro.id()
        if dist_id:
            parts.append(f"({dist_id} {distro.version()})".replace(" )", ")"))
    return " ".join(p for p in parts if p)


__all__ = [
    "OperatingSystem",
    "Bitness",
    "PlatformIdentity",
    "BuildSystemFacts",
    "describe_host",
]
