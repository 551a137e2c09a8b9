"""
Project-wide compiler defaults applied right after detection.

Warnings are treated as errors on GCC-compatible compilers. Use
FlagComposer.restore_defaults() before adding code that cannot meet that.

Provided definitions (defined to 1):
    <processor>         e.g. x86_64=1
    WINDOWS, WIN32      on Windows
    <system name>       e.g. Linux=1, Darwin=1 elsewhere
    WIN32_MINGW         MinGW toolchain, 32 bit
    WIN32_MINGW64       MinGW toolchain, 64 bit
    WIN32_VS            MSVC (debug and release extras)
    MZ_HAS_CXX11, MZ_HAS_CXX0X when a C++11 subset is available
"""

import logging

from ..core.platform import BuildSystemFacts, OperatingSystem
from .accumulator import BuildType
from .composer import FlagComposer, PlatformSelector

logger = logging.getLogger(__name__)

GCC_WARNINGS = ("-Wall", "-Werror", "-Wno-unused-function")

MSVC_DEBUG_EXTRAS = ("/MP", "/MDd", "/D", "DEBUG", "/D", "WIN32_VS=1")
MSVC_RELEASE_EXTRAS = ("/MP", "/MD", "/D", "WIN32_VS=1", "/O2")


def apply_project_baseline(composer: FlagComposer, facts: BuildSystemFacts):
    """
    Add the baseline flags and definitions for the resolved toolchain.

    Args:
        composer: Composer bound to the resolved environment
        facts: Build system facts (processor and system name)
    """
    env = composer.environment
    windows = env.os is OperatingSystem.WINDOWS

    if env.is_gcc and env.has_cxx11:
        composer.add_cxx_flag(PlatformSelector.GCC, "-std=gnu++0x")
        logger.info("forcing C++11 support on this platform")

    if facts.system_processor:
        composer.add_definition(f"{facts.system_processor}=1")
    composer.add_flag(PlatformSelector.GCC, *GCC_WARNINGS)

    if windows:
        composer.add_definition("WIN32=1", "WINDOWS=1")
    else:
        composer.add_definition(f"{facts.system_name}=1")

    if env.is_gcc:
        composer.add_flag(PlatformSelector.GCC, "-DDEBUG", build_type=BuildType.DEBUG)
        composer.add_flag(PlatformSelector.GCC, "-O3", build_type=BuildType.RELEASE)
        if windows:
            if env.platform.is_64bit:
                composer.add_definition("WIN32_MINGW64=1")
            else:
                composer.add_definition("WIN32_MINGW=1")
    elif env.is_msvc:
        composer.add_flag(
            PlatformSelector.MSVC, *MSVC_DEBUG_EXTRAS, build_type=BuildType.DEBUG
        )
        composer.add_flag(
            PlatformSelector.MSVC, *MSVC_RELEASE_EXTRAS, build_type=BuildType.RELEASE
        )

    if env.has_cxx11:
        composer.add_definition("MZ_HAS_CXX11=1", "MZ_HAS_CXX0X=1")
