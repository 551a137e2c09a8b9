"""
Entry point for running FlagKit CLI as a module.

Usage: python -m flagkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
