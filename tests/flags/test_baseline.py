"""
Tests for flagkit.flags.baseline module.
"""

from flagkit.flags.accumulator import BuildType, FlagAccumulator, Language
from flagkit.flags.baseline import apply_project_baseline
from flagkit.flags.composer import FlagComposer
from flagkit.toolchain.cache import ResolutionCache
from flagkit.toolchain.classifier import ToolchainClassifier
from tests.fixtures.toolchains import FakeProbe, make_facts


def composer_for(facts, probe):
    accumulator = FlagAccumulator()
    cache = ResolutionCache(facts, accumulator, classifier=ToolchainClassifier(probe))
    return FlagComposer(cache.ensure_resolved(), accumulator)


class TestGccBaseline:
    """Baseline on GCC-compatible compilers."""

    def test_linux_gcc48(self, linux_facts, gcc48_probe):
        composer = composer_for(linux_facts, gcc48_probe)

        apply_project_baseline(composer, linux_facts)

        acc = composer.accumulator
        assert acc.flags(Language.CXX) == [
            "-std=gnu++0x",
            "-Wall",
            "-Werror",
            "-Wno-unused-function",
        ]
        assert acc.flags(Language.C) == ["-Wall", "-Werror", "-Wno-unused-function"]
        assert acc.flags(Language.C, BuildType.DEBUG) == ["-DDEBUG"]
        assert acc.flags(Language.CXX, BuildType.RELEASE) == ["-O3"]
        assert acc.definitions == [
            "-Dx86_64=1",
            "-DLinux=1",
            "-DMZ_HAS_CXX11=1",
            "-DMZ_HAS_CXX0X=1",
        ]

    def test_no_cxx11_without_support(self):
        facts = make_facts(system_name="Darwin", cxx_compiler="c++", system_processor="arm64")
        probe = FakeProbe({("c++", ("-dumpversion",)): "4.2.1"})
        composer = composer_for(facts, probe)

        apply_project_baseline(composer, facts)

        acc = composer.accumulator
        assert "-std=gnu++0x" not in acc.flags(Language.CXX)
        assert acc.definitions == ["-Darm64=1", "-DDarwin=1"]

    def test_mingw64(self):
        facts = make_facts(system_name="Windows", generator="MinGW Makefiles")
        probe = FakeProbe({("g++", ("-dumpversion",)): "4.6.2"})
        composer = composer_for(facts, probe)

        apply_project_baseline(composer, facts)

        assert composer.accumulator.definitions == [
            "-Dx86_64=1",
            "-DWIN32=1",
            "-DWINDOWS=1",
            "-DWIN32_MINGW64=1",
            "-DMZ_HAS_CXX11=1",
            "-DMZ_HAS_CXX0X=1",
        ]

    def test_mingw32(self):
        facts = make_facts(
            system_name="Windows", generator="MSYS Makefiles", pointer_size=4
        )
        probe = FakeProbe({("g++", ("-dumpversion",)): "4.4.0"})
        composer = composer_for(facts, probe)

        apply_project_baseline(composer, facts)

        assert "-DWIN32_MINGW=1" in composer.accumulator.definitions
        assert "-DMZ_HAS_CXX11=1" not in composer.accumulator.definitions


class TestMsvcBaseline:
    """Baseline on MSVC."""

    def test_vs2010(self, windows_vs2010_facts, msvc_probe):
        composer = composer_for(windows_vs2010_facts, msvc_probe)

        apply_project_baseline(composer, windows_vs2010_facts)

        acc = composer.accumulator
        assert acc.flags(Language.CXX) == []
        assert acc.flag_string(Language.C, BuildType.DEBUG) == (
            "/MP /MDd /D DEBUG /D WIN32_VS=1"
        )
        assert acc.flag_string(Language.CXX, BuildType.RELEASE) == (
            "/MP /MD /D WIN32_VS=1 /O2"
        )
        assert acc.definitions == [
            "/DAMD64=1",
            "/DWIN32=1",
            "/DWINDOWS=1",
            "/DMZ_HAS_CXX11=1",
            "/DMZ_HAS_CXX0X=1",
        ]

    def test_restore_after_baseline(self, windows_vs2010_facts, msvc_probe):
        composer = composer_for(windows_vs2010_facts, msvc_probe)
        apply_project_baseline(composer, windows_vs2010_facts)

        composer.restore_defaults()

        assert composer.accumulator.flags(Language.C, BuildType.DEBUG) == []
        assert "/DWIN32=1" in composer.accumulator.definitions
