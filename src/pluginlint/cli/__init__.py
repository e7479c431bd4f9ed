"""
CLI module for pluginlint.

Provides the command-line interface using Click.
"""

from pluginlint.cli.main import cli, main

__all__ = ["main", "cli"]
