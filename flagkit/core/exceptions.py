"""
Centralized exception hierarchy for FlagKit.

Every fatal condition aborts the configuration run; there is no retry logic.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class FlagKitError(Exception):
    """Base exception for all FlagKit errors."""

    pass


# ============================================================================
# Toolchain-related Exceptions
# ============================================================================


class ToolchainError(FlagKitError):
    """Base exception for toolchain detection errors."""

    pass


class ProbeFailed(ToolchainError):
    """Raised when a compiler probe cannot be invoked or yields no output."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"Probe of '{executable}' failed: {reason}")


class UnsupportedToolchain(ToolchainError):
    """Raised when neither the GCC nor the MSVC convention matches."""

    def __init__(self, system_name: str, compiler: str = ""):
        self.system_name = system_name
        self.compiler = compiler
        msg = f"Compiler platform currently unsupported: {system_name}"
        if compiler:
            msg += f" (compiler: {compiler})"
        super().__init__(msg)


# ============================================================================
# Flag Composition Exceptions
# ============================================================================


class FlagError(FlagKitError):
    """Base exception for flag composition errors."""

    pass


class InvalidPlatformSelector(FlagError):
    """Raised when a flag is added for an unknown platform selector."""

    def __init__(self, selector):
        self.selector = selector
        super().__init__(
            f"Invalid platform selector '{selector}'. "
            "Please provide a valid platform when adding a compiler flag: "
            "GCC|CLANG|MSVC|ALL"
        )


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(FlagKitError):
    """Configuration parsing or validation error."""

    pass


class BuildConfigurationError(FlagKitError):
    """Raised when running the build-configuration tool fails."""

    pass
