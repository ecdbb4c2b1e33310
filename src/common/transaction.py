from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from records.context import WorldState


logger = logging.getLogger(__name__)

_DELETED = None


class BufferedWorldState:
    """
    Transactional view over another world state.

    Writes and deletes are held in memory until `commit()`, which replays them on
    the underlying state in the order they were made. Reads see the pending
    writes of this transaction first. `rollback()` discards everything pending.

    This gives a single invocation all-or-nothing behaviour against backends that
    have no transactions of their own. It does not isolate concurrent
    invocations from each other.
    """

    def __init__(self, inner: WorldState) -> None:
        self._inner = inner
        self._pending: Dict[str, Optional[bytes]] = {}
        self._log: List[Tuple[str, Optional[bytes]]] = []

    @property
    def pending(self) -> int:
        return len(self._log)

    def get_state(self, key: str) -> Optional[bytes]:
        if key in self._pending:
            return self._pending[key]
        return self._inner.get_state(key)

    def put_state(self, key: str, value: bytes) -> None:
        if not isinstance(key, str) or not key:
            raise ValueError("key must be a non-empty string")
        if not isinstance(value, (bytes, bytearray)):
            raise ValueError("value must be bytes")
        self._pending[key] = bytes(value)
        self._log.append((key, bytes(value)))

    def del_state(self, key: str) -> None:
        self._pending[key] = _DELETED
        self._log.append((key, _DELETED))

    def commit(self) -> int:
        """Apply pending operations to the underlying state; returns how many were applied."""
        applied = 0
        for key, value in self._log:
            if value is _DELETED:
                self._inner.del_state(key)
            else:
                self._inner.put_state(key, value)
            applied += 1
        logger.debug("Committed %d world-state operation(s)", applied)
        self._pending.clear()
        self._log.clear()
        return applied

    def rollback(self) -> None:
        if self._log:
            logger.debug("Discarding %d pending world-state operation(s)", len(self._log))
        self._pending.clear()
        self._log.clear()


__all__ = ["BufferedWorldState"]
