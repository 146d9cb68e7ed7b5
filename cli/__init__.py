"""
CLI module for importgraph.

The command-line interface providing scan, explain, levels and imports commands.
"""

from cli.main import app

__all__ = ["app"]
