"""
CMake build backend.

Hands the composed flags and the detection results to CMake as cache
definitions on its command line.
"""

import logging
import subprocess
from pathlib import Path
from typing import Dict, Optional, Sequence

from flagkit.config.parser import FlagKitConfig
from flagkit.core.exceptions import BuildConfigurationError
from flagkit.core.platform import BuildSystemFacts, OperatingSystem, describe_host
from flagkit.core.provenance import build_timestamp
from flagkit.flags.accumulator import (
    BuildType,
    FlagAccumulator,
    Language,
    toolchain_defaults,
)
from flagkit.flags.baseline import apply_project_baseline
from flagkit.flags.composer import FlagComposer
from flagkit.toolchain.cache import ResolutionCache, ResolvedEnvironment
from flagkit.toolchain.classifier import ToolchainClassifier
from flagkit.toolchain.probe import ProcessProbe

logger = logging.getLogger(__name__)

DEFAULT_GENERATOR = "Unix Makefiles"


def _on_off(value: bool) -> str:
    return "ON" if value else "OFF"


def cache_variables(
    environment: ResolvedEnvironment, build_date: str = ""
) -> Dict[str, str]:
    """
    Detection results published to the CMake project.

    CMakeLists.txt can branch on these, e.g. ``if(MZ_IS_GCC)``.

    Args:
        environment: Resolved toolchain environment
        build_date: Output of the date command (may be empty)

    Returns:
        Mapping of typed cache entry (NAME:TYPE) to value
    """
    os_name = environment.os
    return {
        "MZ_IS_GCC:BOOL": _on_off(environment.is_gcc),
        "MZ_IS_CLANG:BOOL": _on_off(environment.is_clang),
        "MZ_IS_VS:BOOL": _on_off(environment.is_msvc),
        "MZ_IS_XCODE:BOOL": _on_off(environment.is_xcode),
        "MZ_64BIT:BOOL": _on_off(environment.platform.is_64bit),
        "MZ_32BIT:BOOL": _on_off(environment.platform.is_32bit),
        "MZ_HAS_CXX11:BOOL": _on_off(environment.has_cxx11),
        "MZ_HAS_CXX0X:BOOL": _on_off(environment.has_cxx11),
        "DARWIN:BOOL": _on_off(os_name is OperatingSystem.DARWIN),
        "LINUX:BOOL": _on_off(os_name is OperatingSystem.LINUX),
        "WINDOWS:BOOL": _on_off(os_name is OperatingSystem.WINDOWS),
        "MZ_DATE_STRING:STRING": build_date,
    }


class CMakeBackend:
    """
    CMake build backend implementation.
    """

    def __init__(self, cmake: str = "cmake"):
        self.cmake = cmake

    def build_command(
        self,
        build_type: BuildType,
        generator: str,
        base_dir: Path,
        composer: FlagComposer,
        extra_args: Sequence[str] = (),
    ) -> list:
        """
        Assemble the cmake command line.

        Returns:
            Argument list, source directory last
        """
        command = [
            self.cmake,
            "-G",
            generator,
            f"-DCMAKE_BUILD_TYPE={build_type.value}",
        ]
        for name, value in composer.cmake_definitions().items():
            command.append(f"-D{name}={value}")
        for name, value in cache_variables(
            composer.environment, composer.build_date
        ).items():
            command.append(f"-D{name}={value}")
        command.extend(extra_args)
        command.append(str(base_dir))
        return command

    def configure(
        self,
        build_type: BuildType,
        generator: str,
        base_dir: Path,
        composer: FlagComposer,
        extra_args: Sequence[str] = (),
    ) -> int:
        """
        Run CMake configuration in <base_dir>/build/<build type>.

        Returns:
            CMake exit code

        Raises:
            BuildConfigurationError: If cmake cannot be executed
        """
        build_dir = Path(base_dir) / "build" / build_type.value.lower()
        build_dir.mkdir(parents=True, exist_ok=True)

        command = self.build_command(
            build_type, generator, Path(base_dir).resolve(), composer, extra_args
        )
        logger.info(f"Running CMake ({generator}, {build_type.value})")
        logger.debug(f"CMake command: {' '.join(command)}")

        try:
            result = subprocess.run(command, cwd=build_dir)
        except FileNotFoundError:
            raise BuildConfigurationError(f"CMake not found: {self.cmake}")
        except OSError as e:
            raise BuildConfigurationError(f"CMake execution failed: {e}")

        if result.returncode != 0:
            logger.error(f"CMake configuration failed with exit code {result.returncode}")
        return result.returncode


def compose(
    facts: BuildSystemFacts,
    config: Optional[FlagKitConfig] = None,
    probe: Optional[ProcessProbe] = None,
) -> FlagComposer:
    """
    Resolve the toolchain and compose every configured flag.

    Args:
        facts: Build system facts
        config: Project configuration (defaults if None)
        probe: ProcessProbe used for compiler and date queries

    Returns:
        FlagComposer holding the final accumulator

    Raises:
        ProbeFailed, UnsupportedToolchain, InvalidPlatformSelector
    """
    config = config or FlagKitConfig()
    probe = probe or ProcessProbe()

    accumulator = FlagAccumulator.from_defaults(
        toolchain_defaults(facts, config.defaults)
    )
    cache = ResolutionCache(
        facts, accumulator, classifier=ToolchainClassifier(probe)
    )
    environment = cache.ensure_resolved()

    build_date = build_timestamp(environment.platform, probe)
    logger.info(f"Today is: {build_date}")
    composer = FlagComposer(environment, accumulator, build_date=build_date)

    if config.baseline:
        apply_project_baseline(composer, facts)
    if config.vendored:
        composer.restore_defaults()

    composer.add_definition(*config.definitions)
    for entry in config.flags:
        if entry.language == "c":
            composer.add_c_flag(entry.platform, *entry.values, build_type=entry.build_type)
        elif entry.language == "cxx":
            composer.add_cxx_flag(entry.platform, *entry.values, build_type=entry.build_type)
        else:
            composer.add_flag(entry.platform, *entry.values, build_type=entry.build_type)

    logger.debug(f"Host: {describe_host()}")
    logger.debug(
        f"C++ flags: {accumulator.flag_string(Language.CXX)} "
        f"{' '.join(accumulator.definitions)}"
    )
    return composer


def configure(
    build_type,
    generator: Optional[str],
    base_dir: Path,
    config: Optional[FlagKitConfig] = None,
    backend: Optional[CMakeBackend] = None,
    probe: Optional[ProcessProbe] = None,
) -> int:
    """
    Configure one build of the project at base_dir.

    Args:
        build_type: 'Debug' or 'Release'
        generator: CMake generator name (config or 'Unix Makefiles' if None)
        base_dir: Project source directory
        config: Project configuration
        backend: CMake backend to run
        probe: ProcessProbe for compiler interrogation

    Returns:
        Exit code of the build-configuration tool
    """
    config = config or FlagKitConfig()
    build_type = BuildType.parse(build_type)
    generator = generator or config.generator or DEFAULT_GENERATOR

    facts = BuildSystemFacts.from_host(
        generator, cxx_compiler=config.compiler.cxx, c_compiler=config.compiler.c
    )
    composer = compose(facts, config, probe)

    backend = backend or CMakeBackend()
    return backend.configure(
        build_type, generator, Path(base_dir), composer, config.cmake_args
    )
