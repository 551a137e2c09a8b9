"""
Tests for flagkit.toolchain.cache module.
"""

import pytest

from flagkit.core.exceptions import FlagKitError, ProbeFailed
from flagkit.core.platform import Bitness, OperatingSystem
from flagkit.flags.accumulator import FlagAccumulator, Language
from flagkit.toolchain.cache import ResolutionCache
from flagkit.toolchain.classifier import CompilerFamily, ToolchainClassifier
from tests.fixtures.toolchains import FakeProbe


@pytest.fixture
def accumulator():
    return FlagAccumulator.from_defaults(
        {"CMAKE_CXX_FLAGS": "-pipe", "CMAKE_CXX_FLAGS_DEBUG": "-g"}
    )


class TestResolutionCache:
    """Tests for the run-once resolution gate."""

    def test_resolves_once(self, linux_facts, gcc48_probe, accumulator):
        cache = ResolutionCache(
            linux_facts, accumulator, classifier=ToolchainClassifier(gcc48_probe)
        )

        assert cache.has_run is False
        first = cache.ensure_resolved()
        calls = len(gcc48_probe.calls)
        second = cache.ensure_resolved()

        assert first is second
        assert cache.has_run is True
        assert len(gcc48_probe.calls) == calls

    def test_end_to_end_gcc_linux(self, linux_facts, gcc48_probe, accumulator):
        env = ResolutionCache(
            linux_facts, accumulator, classifier=ToolchainClassifier(gcc48_probe)
        ).ensure_resolved()

        assert env.toolchain.family is CompilerFamily.GCC_COMPATIBLE
        assert env.toolchain.version_token == "48"
        assert env.os is OperatingSystem.LINUX
        assert env.bits is Bitness.BITS64
        assert env.has_cxx11 is True
        assert env.is_gcc and not env.is_msvc

    def test_end_to_end_msvc(self, windows_vs2010_facts, msvc_probe):
        env = ResolutionCache(
            windows_vs2010_facts,
            FlagAccumulator(),
            classifier=ToolchainClassifier(msvc_probe),
        ).ensure_resolved()

        assert env.is_msvc
        assert env.os is OperatingSystem.WINDOWS
        assert env.has_cxx11 is True

    def test_defaults_captured_before_mutation(
        self, linux_facts, gcc48_probe, accumulator
    ):
        cache = ResolutionCache(
            linux_facts, accumulator, classifier=ToolchainClassifier(gcc48_probe)
        )
        env = cache.ensure_resolved()

        accumulator.append(Language.CXX, ["-Wall"])
        cache.ensure_resolved()

        assert env.defaults.get(Language.CXX) == ("-pipe",)

    def test_restore_defaults(self, linux_facts, gcc48_probe, accumulator):
        cache = ResolutionCache(
            linux_facts, accumulator, classifier=ToolchainClassifier(gcc48_probe)
        )
        cache.ensure_resolved()
        accumulator.append(Language.CXX, ["-Wall", "-Werror"])

        cache.restore_defaults()

        assert accumulator.flags(Language.CXX) == ["-pipe"]

    def test_environment_before_resolution(self, linux_facts, accumulator):
        cache = ResolutionCache(linux_facts, accumulator)

        with pytest.raises(FlagKitError, match="not been resolved"):
            cache.environment

    def test_failed_resolution_does_not_set_gate(self, linux_facts, accumulator):
        cache = ResolutionCache(
            linux_facts, accumulator, classifier=ToolchainClassifier(FakeProbe({}))
        )

        with pytest.raises(ProbeFailed):
            cache.ensure_resolved()

        assert cache.has_run is False

    def test_as_dict(self, linux_facts, gcc48_probe, accumulator):
        env = ResolutionCache(
            linux_facts, accumulator, classifier=ToolchainClassifier(gcc48_probe)
        ).ensure_resolved()

        data = env.as_dict()

        assert data["family"] == "gcc"
        assert data["os"] == "Linux"
        assert data["bits"] == 64
        assert data["defaults"]["CMAKE_CXX_FLAGS"] == "-pipe"
        assert data["defaults"]["CMAKE_C_FLAGS"] == ""
