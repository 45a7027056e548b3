"""Entry store - owns the ordered entry collection and keeps it persisted."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, Iterator

from .codec import decode_entries, encode_entries
from .core.entry import Entry, sort_newest_first
from .errors import DeserializationError, PersistenceWriteError
from .ports.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "journal_entries"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class EntryStore:
    """
    The in-memory entry collection and its persisted form.

    Entries are kept newest-first by created_at. Every mutation writes the
    whole collection under one key before returning. A failed write raises
    PersistenceWriteError but the in-memory change stays in place.

    Callers get read-only snapshots via `entries`; subscribe() registers a
    callback fired after each mutation.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.kv = kv
        self.storage_key = storage_key
        self._clock = clock
        self._id_factory = id_factory
        self._entries: list[Entry] = []
        self._listeners: list[Callable[[], None]] = []

    # ============== Read-only views ==============

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Snapshot of the current entries, newest first."""
        return tuple(self._entries)

    def get(self, entry_id: str) -> Entry | None:
        """Look up an entry by id. Returns None if not found."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __contains__(self, entry_id: object) -> bool:
        return any(entry.id == entry_id for entry in self._entries)

    # ============== Change notification ==============

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback fired after every change. Returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # ============== Persistence ==============

    def load(self) -> None:
        """
        Populate the collection from storage.

        Missing data means an empty collection. Unreadable or undecodable data
        is logged and also yields an empty collection; the stored bytes are
        left as they are.
        """
        entries: list[Entry] = []
        try:
            blob = self.kv.get(self.storage_key)
            if blob is not None:
                entries = sort_newest_first(decode_entries(blob))
        except OSError as e:
            logger.error(f"Failed to read entries from storage: {e}")
        except DeserializationError as e:
            logger.error(f"Failed to load entries: {e}")

        self._entries = entries
        logger.debug(f"Loaded {len(self._entries)} entries")
        self._notify()

    def save(self) -> None:
        """Write the current collection to storage. Raises PersistenceWriteError."""
        blob = encode_entries(self._entries)
        try:
            self.kv.set(self.storage_key, blob)
        except OSError as e:
            logger.error(f"Failed to save entries: {e}")
            raise PersistenceWriteError(f"Failed to save entries: {e}") from e
        logger.debug(f"Saved {len(self._entries)} entries")

    def _commit(self) -> None:
        """
        Persist after a mutation, notifying listeners whether or not the write succeeds.

        A write failure is re-raised after listeners run, even if one of them raises.
        """
        write_error = None
        try:
            self.save()
        except PersistenceWriteError as e:
            write_error = e

        try:
            self._notify()
        finally:
            if write_error is not None:
                raise write_error

    # ============== Mutations ==============

    def _now(self) -> datetime:
        """Clock reading in UTC. Naive readings are taken as local time."""
        return self._clock().astimezone(timezone.utc)

    def create(self, title: str, content: str) -> Entry:
        """Add a new entry at the head of the list and persist."""
        entry = Entry.new(self._id_factory(), title, content, self._now())
        # A fresh timestamp is the newest, so the head keeps the order
        self._entries.insert(0, entry)
        self._commit()
        return entry

    def update(self, entry_id: str, title: str, content: str) -> None:
        """Replace title/content of an entry and persist. Unknown ids are ignored."""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                break
        else:
            logger.debug(f"Update skipped, no entry with id {entry_id}")
            return

        self._entries[index] = entry.edited(title, content, self._now())
        self._entries = sort_newest_first(self._entries)
        self._commit()

    def delete(self, entry_id: str) -> None:
        """Remove an entry and persist. Unknown ids are ignored."""
        self.delete_many([entry_id])

    def delete_many(self, entry_ids: Iterable[str]) -> None:
        """Remove several entries by id with a single write."""
        doomed = set(entry_ids)
        self._remove(lambda index, entry: entry.id in doomed)

    def delete_at(self, positions: Iterable[int]) -> None:
        """Remove entries at positions in the current list with a single write.

        Out-of-range positions are ignored.
        """
        doomed = set(positions)
        self._remove(lambda index, entry: index in doomed)

    def _remove(self, predicate: Callable[[int, Entry], bool]) -> None:
        kept = [entry for index, entry in enumerate(self._entries) if not predicate(index, entry)]
        removed = len(self._entries) - len(kept)
        if not removed:
            logger.debug("Delete skipped, no matching entries")
            return

        self._entries = kept
        logger.debug(f"Deleted {removed} entries")
        self._commit()
