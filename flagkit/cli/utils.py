"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from flagkit.config.parser import CONFIG_FILENAME, FlagKitConfig, parse_config

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def resolve_config_path(project_root: Path, config: Optional[Path] = None) -> Path:
    """
    Path of the configuration file to use.

    Args:
        project_root: Project root directory
        config: Explicit --config path, if given

    Returns:
        Resolved configuration file path
    """
    if config:
        return Path(config).resolve()
    return Path(project_root).resolve() / CONFIG_FILENAME


def load_project_config(args) -> FlagKitConfig:
    """
    Load the project configuration named by parsed CLI arguments.

    An explicit --config must exist; the default flagkit.yaml is optional.

    Raises:
        ConfigError: If the file is missing (explicit) or invalid
    """
    config_file = resolve_config_path(args.project_root, getattr(args, "config", None))
    required = bool(getattr(args, "config", None))
    logger.debug(f"Loading configuration from {config_file}")
    return parse_config(config_file, required=required)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def format_success_message(
    title: str,
    details: Dict[str, Any],
    width: int = 70,
) -> str:
    """
    Format a standardized success message.

    Args:
        title: Success message title
        details: Key-value pairs to display
        width: Width of message box

    Returns:
        Formatted message string
    """
    lines = []
    lines.append("=" * width)
    lines.append(title)
    lines.append("=" * width)
    lines.append("")

    for key, value in details.items():
        lines.append(f"{key}: {value}")

    lines.append("")
    return "\n".join(lines)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)
