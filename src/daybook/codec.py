"""JSON codec for the persisted entry collection.

The blob is a UTF-8 JSON array of field-tagged entry objects, in list order.
"""

import json

from .core.entry import Entry
from .errors import DeserializationError


def encode_entries(entries: list[Entry] | tuple[Entry, ...]) -> bytes:
    """Serialize entries to the persisted byte form."""
    return json.dumps(
        [entry.to_dict() for entry in entries],
        ensure_ascii=False,
        indent=2,
    ).encode("utf-8")


def decode_entries(blob: bytes) -> list[Entry]:
    """Parse the persisted byte form. Raises DeserializationError on bad data."""
    try:
        data = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DeserializationError(f"Invalid entry data: {e}") from e

    if not isinstance(data, list):
        raise DeserializationError(f"Expected a list of entries, got {type(data).__name__}")

    entries = []
    seen_ids: set[str] = set()
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise DeserializationError(f"Entry {index} is not an object")
        try:
            entries.append(Entry.from_dict(item))
        except KeyError as e:
            raise DeserializationError(f"Entry {index} is missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise DeserializationError(f"Entry {index} is malformed: {e}") from e
        if entries[-1].id in seen_ids:
            raise DeserializationError(f"Entry {index} repeats id {entries[-1].id!r}")
        seen_ids.add(entries[-1].id)
    return entries
