"""
Entry point for running FlagKit CLI as a module.

Usage: python -m flagkit [command] [options]
"""

from flagkit.cli.parser import main

if __name__ == "__main__":
    main()
