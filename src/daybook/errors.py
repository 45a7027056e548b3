"""Error types raised by the entry store."""


class DaybookError(Exception):
    """Base class for daybook errors."""


class DeserializationError(DaybookError):
    """Persisted bytes could not be decoded into entries."""


class PersistenceWriteError(DaybookError):
    """Writing the entry collection to storage failed.

    The in-memory mutation that triggered the write is kept.
    """
