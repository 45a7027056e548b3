"""In-memory key-value storage adapter."""


class MemoryKeyValueStore:
    """
    Dict-backed key-value storage.

    Implements KeyValueStore protocol. Nothing survives the process.
    """

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)
