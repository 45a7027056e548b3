"""Shared wiring between configuration and the entry store."""

from .adapters.file_kv import FileKeyValueStore
from .config import Config
from .store import EntryStore


def get_storage(config: Config) -> FileKeyValueStore:
    """Resolve the key-value storage from config."""
    return FileKeyValueStore(config.resolved_data_dir)


def open_store(config: Config) -> EntryStore:
    """Build the entry store for a config and load persisted entries once."""
    store = EntryStore(get_storage(config), storage_key=config.storage_key)
    store.load()
    return store
