"""
Build backends for FlagKit.
"""

from .cmake import CMakeBackend, cache_variables, compose, configure

__all__ = ["CMakeBackend", "cache_variables", "compose", "configure"]
