"""Shared helpers: sport registry, parsing and logging utilities."""
