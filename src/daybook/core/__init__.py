"""Functional core - pure entry logic with no I/O."""

from .entry import Entry, PREVIEW_LENGTH, sort_newest_first
from .editor import clean_text, is_valid_title, format_list_date, format_editor_date

__all__ = [
    # Entry
    "Entry",
    "PREVIEW_LENGTH",
    "sort_newest_first",
    # Editor
    "clean_text",
    "is_valid_title",
    "format_list_date",
    "format_editor_date",
]
