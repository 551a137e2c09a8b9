"""Shared test fixtures for FlagKit."""
