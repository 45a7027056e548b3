"""Pure entry domain logic - no I/O dependencies."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable

PREVIEW_LENGTH = 100
ELLIPSIS = "..."


@dataclass(frozen=True)
class Entry:
    """A single journal entry."""

    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    @property
    def preview(self) -> str:
        """Content capped at PREVIEW_LENGTH characters, with an ellipsis when cut."""
        if len(self.content) <= PREVIEW_LENGTH:
            return self.content
        return self.content[:PREVIEW_LENGTH] + ELLIPSIS

    @classmethod
    def new(cls, entry_id: str, title: str, content: str, now: datetime) -> "Entry":
        """Create a fresh entry stamped with the same created/updated time."""
        return cls(
            id=entry_id,
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )

    def edited(self, title: str, content: str, now: datetime) -> "Entry":
        """
        Return the replacement value for an edit.

        id and created_at are carried over; updated_at never moves before created_at.
        """
        return replace(
            self,
            title=title,
            content=content,
            updated_at=max(now, self.created_at),
        )

    def to_dict(self) -> dict:
        """Field-tagged mapping used for persistence."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": _format_timestamp(self.created_at),
            "updatedAt": _format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        """
        Create Entry from a persisted mapping.

        Unknown keys are ignored. Raises KeyError, TypeError or ValueError
        on missing or malformed fields.
        """
        for key in ("id", "title", "content", "createdAt", "updatedAt"):
            if not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string")
        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            created_at=_parse_timestamp(data["createdAt"]),
            updated_at=_parse_timestamp(data["updatedAt"]),
        )


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat(timespec="microseconds")


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        # Naive timestamps are stored as UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_newest_first(entries: Iterable[Entry]) -> list[Entry]:
    """
    Sort entries by creation time, newest first.

    Stable: entries created at the same instant keep their relative order.
    Pure function - no I/O.
    """
    return sorted(entries, key=lambda e: e.created_at, reverse=True)
