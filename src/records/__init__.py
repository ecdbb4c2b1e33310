"""
Record store executed as contract logic against a host-supplied world state.

This package defines the stored `Record` schema, the error taxonomy surfaced
to callers, the transaction-context contract, and the `RecordStore` operations
(initialize, store, get, update, delete, exists).
"""

from .context import TransactionContext, Transaction, WorldState
from .errors import (
    BackendError,
    BackendReadError,
    BackendWriteError,
    DeserializationError,
    NotFoundError,
    RecordStoreError,
    SerializationError,
)
from .models import Record
from .store import RecordStore

__all__ = [
    "Record",
    "RecordStore",
    "TransactionContext",
    "Transaction",
    "WorldState",
    "RecordStoreError",
    "NotFoundError",
    "BackendError",
    "BackendReadError",
    "BackendWriteError",
    "SerializationError",
    "DeserializationError",
]
