"""Editor-side helpers: input cleaning, validation, and date display.

The store accepts titles and content as given. Callers clean and validate
before calling it.
"""

from datetime import datetime, tzinfo


def clean_text(value: str) -> str:
    """Strip leading/trailing whitespace and newlines."""
    return value.strip()


def is_valid_title(title: str) -> bool:
    """A title is savable when it has non-whitespace content."""
    return bool(clean_text(title))


def format_list_date(value: datetime, tz: tzinfo | None = None) -> str:
    """Abbreviated date for list rows, e.g. 'Jan 15, 2025'."""
    local = value.astimezone(tz)
    return f"{local:%b} {local.day}, {local.year}"


def format_editor_date(value: datetime, tz: tzinfo | None = None) -> str:
    """Long date with short time for the editor header, e.g. 'January 15, 2025 at 9:30 AM'."""
    local = value.astimezone(tz)
    hour = local.hour % 12 or 12
    return f"{local:%B} {local.day}, {local.year} at {hour}:{local:%M %p}"
