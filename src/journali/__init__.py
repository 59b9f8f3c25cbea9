"""Journali: a small personal journal with bookmarks, search and voice notes."""

__version__ = "0.1.0"
