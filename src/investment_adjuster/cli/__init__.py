"""Command-line interface for Investment Adjuster."""

from investment_adjuster.cli.main import cli, main

__all__ = [
    "cli",
    "main",
]
