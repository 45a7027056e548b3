"""Key-value storage interface."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Flat byte store addressed by string keys."""

    def get(self, key: str) -> bytes | None:
        """Read the value for a key. Returns None if not set."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Write/overwrite the value for a key. Raises OSError on failure."""
        ...
