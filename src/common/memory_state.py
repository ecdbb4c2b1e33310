from __future__ import annotations

from typing import Dict, Iterator, Optional


class InMemoryWorldState:
    """
    Dict-backed world state for local runs and tests.

    - Values are stored as immutable bytes copies.
    - `del_state` of a missing key is a no-op, matching ledger semantics.
    """

    def __init__(self, initial: Optional[Dict[str, bytes]] = None) -> None:
        self._data: Dict[str, bytes] = {}
        for k, v in (initial or {}).items():
            self.put_state(k, v)

    def put_state(self, key: str, value: bytes) -> None:
        if not isinstance(key, str) or not key:
            raise ValueError("key must be a non-empty string")
        if not isinstance(value, (bytes, bytearray)):
            raise ValueError("value must be bytes")
        self._data[key] = bytes(value)

    def get_state(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def del_state(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(sorted(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


__all__ = ["InMemoryWorldState"]
