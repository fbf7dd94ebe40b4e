"""
gui — PyQt6 front-end for pocketstore.

Public API
──────────
main_window           — MainWindow (top-level tabbed window) and run()
viewmodels            — pure-Python state containers (no Qt)
pages                 — the two screens

Importing this package does not import Qt; use pocketstore.gui.main_window
for the widgets so the view models stay usable without PyQt6.
"""

from pocketstore.gui import viewmodels

__all__ = ["viewmodels"]
