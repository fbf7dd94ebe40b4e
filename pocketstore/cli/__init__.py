"""
cli — command-line interface for pocketstore.

Entry points
────────────
  python -m pocketstore   (via pocketstore/__main__.py)
  pocketstore             (via pyproject.toml [project.scripts])

Subcommands: save-secret | show-secret | clear-secret |
             list | add | update | delete | clear | gui
"""

from pocketstore.cli.main import build_parser, cmd_list, main

__all__ = ["build_parser", "cmd_list", "main"]
