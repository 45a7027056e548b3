"""File-based key-value storage adapter."""

import logging
import os
import re
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


def is_valid_key(key: str) -> bool:
    """Keys map to file names, so only a safe character set is allowed."""
    return bool(_SAFE_KEY.match(key)) and key not in (".", "..")


class FileKeyValueStore:
    """
    File-based key-value storage.

    Implements KeyValueStore protocol. Each key gets one file in data_dir.
    Writes go to a temp file in the same directory and are swapped in with
    os.replace, so a reader never sees a half-written value.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        if not is_valid_key(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        """Read the value for a key. Returns None if not set."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        """Write/overwrite the value for a key."""
        path = self._path_for_key(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(value)} bytes to {path}")
