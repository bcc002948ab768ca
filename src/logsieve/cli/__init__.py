"""
Command-line interface for logsieve.
"""

from .main import build_parser, main, main_cli, parse_args

__all__ = ["build_parser", "main", "main_cli", "parse_args"]
