"""
Detect command implementation.

Resolves the toolchain environment and prints it.
"""

import json
import logging

from flagkit.backends.cmake import DEFAULT_GENERATOR, cache_variables, compose
from flagkit.cli.utils import format_success_message, load_project_config, print_error
from flagkit.core.exceptions import FlagKitError
from flagkit.core.platform import BuildSystemFacts

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the detect command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = load_project_config(args)
        generator = args.generator or config.generator or DEFAULT_GENERATOR
        facts = BuildSystemFacts.from_host(
            generator, cxx_compiler=config.compiler.cxx, c_compiler=config.compiler.c
        )
        composer = compose(facts, config)
    except FlagKitError as e:
        logger.debug(f"Detection failed: {e!r}")
        print_error(str(e))
        return 1

    environment = composer.environment
    if args.json:
        payload = environment.as_dict()
        payload["flags"] = composer.cmake_definitions()
        payload["cache"] = cache_variables(environment, composer.build_date)
        print(json.dumps(payload, indent=2))
        return 0

    details = {
        "Compiler": facts.cxx_compiler,
        "Toolchain": str(environment.toolchain),
        "Platform": str(environment.platform),
        "Xcode": environment.is_xcode,
        "C++11 subset": environment.has_cxx11,
    }
    details.update(composer.cmake_definitions())
    print(format_success_message("Toolchain environment", details))
    return 0
