from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from .context import TransactionContext
from .errors import (
    BackendReadError,
    BackendWriteError,
    DeserializationError,
    NotFoundError,
    SerializationError,
)
from .models import Record


logger = logging.getLogger(__name__)


def _dump_record_json(record: Record) -> bytes:
    # Deterministic JSON: stable key order, no extra whitespace
    return json.dumps(record.model_dump(), separators=(",", ":"), sort_keys=True).encode("utf-8")


def _load_record_json(data: bytes) -> Record:
    raw = json.loads(data.decode("utf-8"))
    return Record.model_validate(raw)


class RecordStore:
    """
    CRUD operations over `Record` values kept in the host's world state.

    Usage
    - Every operation takes the transaction context first; the store itself holds
      no state, so one instance can serve any number of invocations.
    - `store` writes unconditionally. `update` and `delete` check existence first
      and raise `NotFoundError` when the key is absent.

    Atomicity
    - `update` and `delete` are an existence check followed by a mutation. The two
      steps are only atomic if the context's world state runs them inside one
      transaction; this class does not lock or retry.
    """

    def initialize(self, ctx: TransactionContext) -> None:
        """Reserved for seeding the ledger; currently writes nothing."""
        return None

    def store(self, ctx: TransactionContext, key: str, value: str) -> Record:
        """Write `value` under `key`, overwriting any existing record.

        Raises:
        - SerializationError if the record cannot be built or encoded.
        - BackendWriteError if the world-state write fails.
        """
        record, payload = self._build(ctx, key, value)
        try:
            ctx.world_state.put_state(key, payload)
        except Exception as ex:
            raise BackendWriteError(f"failed to write {key} to world state: {ex}") from ex
        logger.debug("Stored record %s (owner=%s)", key, record.owner)
        return record

    def get(self, ctx: TransactionContext, key: str) -> Record:
        """Return the record stored under `key`.

        Raises:
        - BackendReadError if the world-state read fails.
        - NotFoundError if nothing is stored under `key`.
        - DeserializationError if the stored bytes are not a valid record.
        """
        data = self._read(ctx, key)
        if not data:
            raise NotFoundError(key)
        try:
            return _load_record_json(data)
        except (ValueError, ValidationError) as ex:
            raise DeserializationError(f"failed to parse record {key}: {ex}") from ex

    def update(self, ctx: TransactionContext, key: str, value: str) -> Record:
        """Overwrite an existing record; owner and timestamp are taken from `ctx`."""
        if not self.exists(ctx, key):
            raise NotFoundError(key)
        return self.store(ctx, key, value)

    def delete(self, ctx: TransactionContext, key: str) -> None:
        if not self.exists(ctx, key):
            raise NotFoundError(key)
        try:
            ctx.world_state.del_state(key)
        except Exception as ex:
            raise BackendWriteError(f"failed to delete {key} from world state: {ex}") from ex
        logger.debug("Deleted record %s", key)

    def exists(self, ctx: TransactionContext, key: str) -> bool:
        return bool(self._read(ctx, key))

    # --------------- Internal ---------------
    def _read(self, ctx: TransactionContext, key: str):
        try:
            return ctx.world_state.get_state(key)
        except Exception as ex:
            raise BackendReadError(f"failed to read {key} from world state: {ex}") from ex

    def _build(self, ctx: TransactionContext, key: str, value: str) -> tuple[Record, bytes]:
        try:
            record = Record(
                key=key,
                value=value,
                owner=ctx.get_caller_identity(),
                timestamp=ctx.get_transaction_timestamp(),
            )
            return record, _dump_record_json(record)
        except (TypeError, ValueError, ValidationError) as ex:
            raise SerializationError(f"failed to encode record {key}: {ex}") from ex


__all__ = ["RecordStore"]
