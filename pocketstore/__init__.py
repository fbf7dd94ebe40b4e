"""
pocketstore — local persistence primitives.

An encrypted single-value store and a paginated SQLite people registry,
driven from a PyQt6 desktop GUI or the command line.
"""

__version__ = "0.1.0"
