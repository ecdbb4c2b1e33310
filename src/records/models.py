from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field, StrictStr


class Record(BaseModel):
    """
    A value stored in the world state together with who wrote it and when.

    Fields
    - key: caller-chosen identifier; unique in the world state and kept by updates.
    - value: arbitrary string payload.
    - owner: identity of the caller that performed the latest store/update.
    - timestamp: transaction time of the latest store/update, as supplied by the host.

    Notes
    - The stored object is the JSON encoding of this model. Field names are part of
      the on-ledger format and must not be renamed: other contract versions and
      client applications read `key`, `value`, `owner`, `timestamp` verbatim.
    - `owner` is overwritten on every write, so an update by another caller takes
      over the record.
    """

    key: StrictStr = Field(description="World-state key the record is stored under")
    value: StrictStr = Field(description="Arbitrary string payload")
    owner: StrictStr = Field(description="Identity of the last writer")
    timestamp: StrictStr = Field(description="Transaction time of the last write")

    def to_payload(self) -> Dict[str, Any]:
        """Plain dict form used in invocation responses."""
        return self.model_dump()
