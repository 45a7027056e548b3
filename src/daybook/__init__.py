"""Daybook - offline note-keeping store."""

__version__ = "0.1.0"
