"""YAML configuration parser for FlagKit.

This module provides parsing and validation for flagkit.yaml configuration files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ..core.exceptions import ConfigError, InvalidPlatformSelector
from ..flags.accumulator import SLOTS, BuildType, cmake_variable
from ..flags.composer import PlatformSelector

CONFIG_FILENAME = "flagkit.yaml"

_LANGUAGES = {"c", "cxx", "all"}
_DEFAULT_VARIABLES = {cmake_variable(*slot) for slot in SLOTS}


@dataclass
class FlagEntry:
    """A platform-gated group of flags."""

    platform: PlatformSelector
    values: List[str]
    language: str = "all"  # 'c', 'cxx', 'all'
    build_type: Optional[BuildType] = None


@dataclass
class CompilerConfig:
    """Compiler executable overrides."""

    cxx: Optional[str] = None
    c: Optional[str] = None


@dataclass
class FlagKitConfig:
    """Complete FlagKit configuration."""

    version: int = 1
    generator: Optional[str] = None
    build_type: Optional[str] = None
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    baseline: bool = True
    defaults: Dict[str, str] = field(default_factory=dict)
    definitions: List[str] = field(default_factory=list)
    flags: List[FlagEntry] = field(default_factory=list)
    vendored: bool = False
    cmake_args: List[str] = field(default_factory=list)


def parse_config(config_path: Path, required: bool = False) -> FlagKitConfig:
    """
    Parse flagkit.yaml configuration file.

    Args:
        config_path: Path to flagkit.yaml
        required: If True, a missing file is an error

    Returns:
        Parsed and validated configuration (defaults if the file is absent
        and not required)

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return FlagKitConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        return FlagKitConfig()
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    return _parse_and_validate(data)


def _parse_and_validate(data: dict) -> FlagKitConfig:
    """Parse and validate configuration data."""
    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    build_type = data.get("build_type")
    if build_type is not None:
        build_type = _parse_build_type(build_type, "build_type").value

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ConfigError("defaults must be a mapping of flag variables")
    for name in defaults:
        if name not in _DEFAULT_VARIABLES:
            raise ConfigError(
                f"defaults.{name} is not a flag variable. "
                f"Valid: {', '.join(sorted(_DEFAULT_VARIABLES))}"
            )

    return FlagKitConfig(
        version=version,
        generator=data.get("generator"),
        build_type=build_type,
        compiler=_parse_compiler(data.get("compiler")),
        baseline=bool(data.get("baseline", True)),
        defaults={k: "" if v is None else str(v) for k, v in defaults.items()},
        definitions=[str(d) for d in _as_list(data.get("definitions"), "definitions")],
        flags=[
            _parse_flag_entry(entry, i)
            for i, entry in enumerate(_as_list(data.get("flags"), "flags"))
        ],
        vendored=bool(data.get("vendored", False)),
        cmake_args=[str(a) for a in _as_list(data.get("cmake_args"), "cmake_args")],
    )


def _as_list(value, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{name} must be a list")
    return value


def _parse_compiler(data) -> CompilerConfig:
    if data is None:
        return CompilerConfig()
    if isinstance(data, str):
        return CompilerConfig(cxx=data)
    if not isinstance(data, dict):
        raise ConfigError("compiler must be a string or a mapping")
    return CompilerConfig(cxx=data.get("cxx"), c=data.get("c"))


def _parse_build_type(value, where: str) -> BuildType:
    try:
        return BuildType.parse(value)
    except ValueError as e:
        raise ConfigError(f"{where}: {e}")


def _parse_flag_entry(data, index: int) -> FlagEntry:
    """Parse one entry of the flags list."""
    where = f"flags[{index}]"
    if not isinstance(data, dict):
        raise ConfigError(f"{where} must be a mapping")

    try:
        platform = PlatformSelector.parse(data.get("platform", "ALL"))
    except InvalidPlatformSelector as e:
        raise ConfigError(f"{where}: {e}")

    language = str(data.get("language", "all")).lower()
    if language not in _LANGUAGES:
        raise ConfigError(f"{where}: invalid language '{language}' (c|cxx|all)")

    values = data.get("values")
    if isinstance(values, str):
        values = values.split()
    elif values is not None and not isinstance(values, list):
        raise ConfigError(f"{where}: values must be a list or a string")
    if not values:
        raise ConfigError(f"{where}: values must be a non-empty list")

    build_type = data.get("build_type")
    if build_type is not None:
        build_type = _parse_build_type(build_type, where)

    return FlagEntry(
        platform=platform,
        values=[str(v) for v in values],
        language=language,
        build_type=build_type,
    )
