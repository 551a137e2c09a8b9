"""
Tests for flagkit.backends.cmake module.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from flagkit.backends.cmake import CMakeBackend, cache_variables, compose, configure
from flagkit.config.parser import CompilerConfig, FlagEntry, FlagKitConfig
from flagkit.core.exceptions import BuildConfigurationError, UnsupportedToolchain
from flagkit.core.provenance import DATE_FORMAT
from flagkit.flags.accumulator import BuildType, FlagAccumulator, Language
from flagkit.flags.composer import PlatformSelector
from flagkit.toolchain.cache import ResolutionCache
from flagkit.toolchain.classifier import ToolchainClassifier
from tests.fixtures.toolchains import FakeProbe, make_facts


@pytest.fixture
def gcc_probe():
    return FakeProbe(
        {
            ("g++", ("-dumpversion",)): "4.8.2",
            ("g++", ("--version",)): "g++ (GCC) 4.8.2",
            ("date", (DATE_FORMAT,)): "Sun, 11 Dec 2011 12:07:00 +0200",
        }
    )


class TestCompose:
    """Tests for the detection and composition pipeline."""

    def test_baseline_and_config(self, linux_facts, gcc_probe):
        config = FlagKitConfig(
            definitions=["FOO"],
            flags=[
                FlagEntry(PlatformSelector.GCC, ["-Wextra"], language="cxx"),
                FlagEntry(PlatformSelector.MSVC, ["/W4"]),
                FlagEntry(
                    PlatformSelector.ALL, ["-g3"], language="c", build_type=BuildType.DEBUG
                ),
            ],
        )

        composer = compose(linux_facts, config, gcc_probe)

        rendered = composer.cmake_definitions()
        assert rendered["CMAKE_CXX_FLAGS"].startswith("-std=gnu++0x -Wall")
        assert "-Wextra" in rendered["CMAKE_CXX_FLAGS"]
        assert "/W4" not in rendered["CMAKE_C_FLAGS"]
        assert rendered["CMAKE_CXX_FLAGS"].endswith("-DMZ_HAS_CXX0X=1 -DFOO")
        assert rendered["CMAKE_C_FLAGS_DEBUG"] == "-g -DDEBUG -g3"
        assert rendered["CMAKE_CXX_FLAGS_RELEASE"] == "-O3 -DNDEBUG -O3"

    def test_without_baseline(self, linux_facts, gcc_probe):
        composer = compose(linux_facts, FlagKitConfig(baseline=False), gcc_probe)

        assert composer.accumulator.flags(Language.CXX) == []
        assert composer.accumulator.definitions == []

    def test_vendored_restores_defaults(self, linux_facts, gcc_probe):
        config = FlagKitConfig(vendored=True, defaults={"CMAKE_C_FLAGS": "-pipe"})

        composer = compose(linux_facts, config, gcc_probe)

        acc = composer.accumulator
        assert acc.flags(Language.C) == ["-pipe"]
        assert acc.flags(Language.C, BuildType.DEBUG) == ["-g"]
        assert "-DLinux=1" in acc.definitions

    def test_build_date_is_carried(self, linux_facts, gcc_probe):
        composer = compose(linux_facts, FlagKitConfig(), gcc_probe)

        assert composer.build_date == "Sun, 11 Dec 2011 12:07:00 +0200"

    def test_unsupported_toolchain_propagates(self):
        facts = make_facts(system_name="Windows", generator="Ninja", cxx_compiler="tcc")

        with pytest.raises(UnsupportedToolchain):
            compose(facts, FlagKitConfig(), FakeProbe({}))


class TestCMakeBackend:
    """Tests for CMakeBackend."""

    @pytest.fixture
    def composer(self, linux_facts, gcc_probe):
        return compose(linux_facts, FlagKitConfig(baseline=False), gcc_probe)

    def test_build_command(self, composer):
        command = CMakeBackend().build_command(
            BuildType.RELEASE, "Ninja", Path("/src"), composer, ["-DX=1"]
        )

        assert command[:4] == ["cmake", "-G", "Ninja", "-DCMAKE_BUILD_TYPE=Release"]
        assert "-DCMAKE_CXX_FLAGS_RELEASE=-O3 -DNDEBUG" in command
        assert command[-2:] == ["-DX=1", str(Path("/src"))]

    def test_build_command_publishes_detection_results(self, composer):
        command = CMakeBackend().build_command(
            BuildType.DEBUG, "Ninja", Path("/src"), composer
        )

        assert "-DMZ_IS_GCC:BOOL=ON" in command
        assert "-DMZ_IS_VS:BOOL=OFF" in command
        assert "-DLINUX:BOOL=ON" in command
        assert "-DMZ_DATE_STRING:STRING=Sun, 11 Dec 2011 12:07:00 +0200" in command
        assert command[-1] == str(Path("/src"))

    def test_configure_runs_in_build_dir(self, composer, tmp_path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0)

            result = CMakeBackend().configure(
                BuildType.DEBUG, "Unix Makefiles", tmp_path, composer
            )

        assert result == 0
        build_dir = tmp_path / "build" / "debug"
        assert build_dir.is_dir()
        assert mock_run.call_args.kwargs["cwd"] == build_dir

    def test_configure_returns_failure_code(self, composer, tmp_path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=1)

            assert CMakeBackend().configure(
                BuildType.RELEASE, "Ninja", tmp_path, composer
            ) == 1

    def test_cmake_not_found(self, composer, tmp_path):
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(BuildConfigurationError, match="CMake not found"):
                CMakeBackend("cmake-missing").configure(
                    BuildType.DEBUG, "Ninja", tmp_path, composer
                )


class TestConfigure:
    """Tests for the configure() entry point."""

    def test_passes_flags_to_backend(self, tmp_path, gcc_probe, monkeypatch):
        monkeypatch.setattr("platform.system", lambda: "Linux")
        backend = Mock()
        backend.configure.return_value = 0
        config = FlagKitConfig(
            compiler=CompilerConfig(cxx="g++", c="gcc"), cmake_args=["-DY=2"]
        )

        result = configure(
            "Debug", None, tmp_path, config, backend=backend, probe=gcc_probe
        )

        assert result == 0
        build_type, generator, base_dir, composer, extra = backend.configure.call_args.args
        assert build_type is BuildType.DEBUG
        assert generator == "Unix Makefiles"
        assert base_dir == tmp_path
        assert composer.environment.toolchain.version_token == "48"
        assert extra == ["-DY=2"]

    def test_generator_from_config(self, tmp_path, gcc_probe, monkeypatch):
        monkeypatch.setattr("platform.system", lambda: "Linux")
        backend = Mock()
        backend.configure.return_value = 0
        config = FlagKitConfig(generator="Ninja", compiler=CompilerConfig(cxx="g++"))

        configure("Release", None, tmp_path, config, backend=backend, probe=gcc_probe)

        assert backend.configure.call_args.args[1] == "Ninja"

    def test_invalid_build_type(self, tmp_path):
        with pytest.raises(ValueError):
            configure("Profile", "Ninja", tmp_path, FlagKitConfig())


class TestCacheVariables:
    """Tests for cache_variables()."""

    def test_linux_gcc(self, linux_facts, gcc_probe):
        composer = compose(linux_facts, FlagKitConfig(), gcc_probe)

        variables = cache_variables(composer.environment, composer.build_date)

        assert variables == {
            "MZ_IS_GCC:BOOL": "ON",
            "MZ_IS_CLANG:BOOL": "OFF",
            "MZ_IS_VS:BOOL": "OFF",
            "MZ_IS_XCODE:BOOL": "OFF",
            "MZ_64BIT:BOOL": "ON",
            "MZ_32BIT:BOOL": "OFF",
            "MZ_HAS_CXX11:BOOL": "ON",
            "MZ_HAS_CXX0X:BOOL": "ON",
            "DARWIN:BOOL": "OFF",
            "LINUX:BOOL": "ON",
            "WINDOWS:BOOL": "OFF",
            "MZ_DATE_STRING:STRING": "Sun, 11 Dec 2011 12:07:00 +0200",
        }

    def test_vs2010_32bit(self, windows_vs2010_facts, msvc_probe):
        cache = ResolutionCache(
            windows_vs2010_facts,
            FlagAccumulator(),
            classifier=ToolchainClassifier(msvc_probe),
        )

        variables = cache_variables(cache.ensure_resolved())

        assert variables["MZ_IS_VS:BOOL"] == "ON"
        assert variables["MZ_IS_GCC:BOOL"] == "OFF"
        assert variables["MZ_32BIT:BOOL"] == "ON"
        assert variables["MZ_64BIT:BOOL"] == "OFF"
        assert variables["MZ_HAS_CXX11:BOOL"] == "ON"
        assert variables["WINDOWS:BOOL"] == "ON"
        assert variables["MZ_DATE_STRING:STRING"] == ""

    def test_clang_xcode(self, clang_probe):
        facts = make_facts(system_name="Darwin", generator="Xcode", cxx_compiler="c++")
        cache = ResolutionCache(
            facts, FlagAccumulator(), classifier=ToolchainClassifier(clang_probe)
        )

        variables = cache_variables(cache.ensure_resolved())

        assert variables["MZ_IS_CLANG:BOOL"] == "ON"
        assert variables["MZ_IS_XCODE:BOOL"] == "ON"
        assert variables["DARWIN:BOOL"] == "ON"
        assert variables["MZ_HAS_CXX11:BOOL"] == "OFF"
