from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class WorldState(Protocol):
    """Key-value state the host platform exposes to contract logic.

    `get_state` returns None (or empty bytes) when nothing is stored under `key`.
    Any exception raised by these calls is treated as a backend failure.
    """

    def put_state(self, key: str, value: bytes) -> None: ...

    def get_state(self, key: str) -> Optional[bytes]: ...

    def del_state(self, key: str) -> None: ...


@runtime_checkable
class TransactionContext(Protocol):
    """Per-invocation context: world state plus caller identity and tx time."""

    world_state: WorldState

    def get_caller_identity(self) -> str: ...

    def get_transaction_timestamp(self) -> str: ...


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass
class Transaction:
    """
    Concrete `TransactionContext` for local invocations and tests.

    The timestamp is fixed when the transaction is created so every write in one
    invocation carries the same time, mirroring a ledger transaction header.
    """

    world_state: WorldState
    caller_identity: str
    timestamp: str = field(default_factory=_utc_now_iso)

    def get_caller_identity(self) -> str:
        return self.caller_identity

    def get_transaction_timestamp(self) -> str:
        return self.timestamp


__all__ = ["WorldState", "TransactionContext", "Transaction"]
