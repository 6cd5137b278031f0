"""
CLI Module for Football Analytics

Command-line interface for league tables, team form, comparisons and
match predictions.

Usage:
    python -m cli.main --help
"""

from cli.main import build_parser, main

__all__ = ["build_parser", "main"]
