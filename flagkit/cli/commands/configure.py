"""
Configure command implementation.

Resolves the toolchain, composes flags and runs CMake.
"""

import logging
from pathlib import Path

from flagkit.backends.cmake import configure
from flagkit.cli.utils import load_project_config, print_error
from flagkit.core.exceptions import FlagKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the configure command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    project_root = Path(args.project_root).resolve()
    logger.debug(f"Arguments: {args}")

    try:
        config = load_project_config(args)
        if args.cmake_args:
            config.cmake_args.extend(args.cmake_args)
        build_type = args.build_type or config.build_type or "Debug"

        exit_code = configure(build_type, args.generator, project_root, config)
    except FlagKitError as e:
        logger.debug(f"Configuration failed: {e!r}")
        print_error(str(e))
        return 1

    if exit_code == 0:
        print(f"Generation of {build_type} build succeeded")
    else:
        print_error(f"Generation of {build_type} build failed (exit code {exit_code})")
    return exit_code
