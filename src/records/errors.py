from __future__ import annotations


class RecordStoreError(RuntimeError):
    """Base error for record store operations."""


class NotFoundError(RecordStoreError):
    """No record is stored under the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"the record {key} does not exist")
        self.key = key


class BackendError(RecordStoreError):
    """The underlying world-state call failed."""


class BackendReadError(BackendError):
    """Reading from the world state failed."""


class BackendWriteError(BackendError):
    """Writing to or deleting from the world state failed."""


class SerializationError(RecordStoreError):
    """A record could not be built or encoded for storage."""


class DeserializationError(RecordStoreError):
    """Stored bytes could not be parsed back into a record."""


__all__ = [
    "RecordStoreError",
    "NotFoundError",
    "BackendError",
    "BackendReadError",
    "BackendWriteError",
    "SerializationError",
    "DeserializationError",
]
