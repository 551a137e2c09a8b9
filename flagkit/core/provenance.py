"""
Build provenance - records when the configuration was run.

The timestamp is informational only and never influences flag composition.
"""

import logging
from typing import Optional

from .exceptions import ProbeFailed
from ..toolchain.probe import ProcessProbe
from .platform import OperatingSystem, PlatformIdentity

logger = logging.getLogger(__name__)

# e.g. Sun, 11 Dec 2011 12:07:00 +0200
DATE_FORMAT = "+%a, %d %b %Y %T %z"


def build_timestamp(
    platform: PlatformIdentity, probe: Optional[ProcessProbe] = None
) -> str:
    """
    Query the system date through the platform's date command.

    Args:
        platform: Resolved target platform
        probe: ProcessProbe to run the command with

    Returns:
        Date string, or '' if the command failed
    """
    probe = probe or ProcessProbe()

    if platform.os is OperatingSystem.WINDOWS:
        args = ["/T"]
    else:
        args = [DATE_FORMAT]

    try:
        return probe.probe("date", args)
    except ProbeFailed as e:
        logger.warning(f"Could not determine build date: {e}")
        return ""
