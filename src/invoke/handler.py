from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from common.config import getenv, load_ssm_params, require
from common.memory_state import InMemoryWorldState
from common.s3_state import S3WorldState
from common.transaction import BufferedWorldState
from records import BackendWriteError, Record, RecordStore, RecordStoreError, Transaction, WorldState


logger = logging.getLogger(__name__)

# Environment configuration
ENV_BACKEND = "RECORDS_BACKEND"  # "s3" (default) or "memory"
ENV_PARAM_PREFIX = "PARAM_PREFIX"  # optional; SSM prefix holding fernet_key
ENV_LOG_LEVEL = "LOG_LEVEL"

MODE_SUBMIT = "submit"
MODE_EVALUATE = "evaluate"


class InvocationError(RuntimeError):
    """The invocation request itself is malformed (function, arguments, identity, mode)."""


@dataclass(frozen=True)
class _Operation:
    name: str
    arity: int
    call: Callable[..., Any]


_STORE = RecordStore()

_OPERATIONS: Dict[str, _Operation] = {
    op.name: op
    for op in (
        _Operation("initialize", 0, _STORE.initialize),
        _Operation("store", 2, _STORE.store),
        _Operation("get", 1, _STORE.get),
        _Operation("update", 2, _STORE.update),
        _Operation("delete", 1, _STORE.delete),
        _Operation("exists", 1, _STORE.exists),
    )
}

# Chaincode-style function names used by existing client applications
_ALIASES: Dict[str, str] = {
    "initledger": "initialize",
    "storemetadata": "store",
    "getmetadata": "get",
    "updatemetadata": "update",
    "deletemetadata": "delete",
    "metadataexists": "exists",
}


def resolve_operation(fcn: Any) -> _Operation:
    if not isinstance(fcn, str) or not fcn.strip():
        raise InvocationError("fcn is required")
    name = fcn.strip().lower()
    name = _ALIASES.get(name, name)
    op = _OPERATIONS.get(name)
    if op is None:
        raise InvocationError(f"Unknown function: {fcn}")
    return op


def _parse_args(op: _Operation, raw: Any) -> List[str]:
    args = [] if raw is None else raw
    if not isinstance(args, (list, tuple)):
        raise InvocationError("args must be a list of strings")
    if len(args) != op.arity:
        raise InvocationError(f"{op.name} expects {op.arity} argument(s), got {len(args)}")
    for a in args:
        if not isinstance(a, str):
            raise InvocationError(f"{op.name} arguments must be strings")
    return list(args)


def _to_result(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_payload()
    return value


def _error_envelope(fcn: str, exc: Exception) -> Dict[str, Any]:
    return {"ok": False, "fcn": fcn, "error": {"type": type(exc).__name__, "message": str(exc)}}


def invoke(event: Dict[str, Any], world_state: WorldState) -> Dict[str, Any]:
    """
    Run one named record-store operation as a single transaction.

    Event fields
    - fcn: operation name (`store`, `get`, ... or chaincode names such as `StoreMetadata`).
    - args: list of string arguments.
    - identity: caller identity string recorded as the record owner.
    - mode: `submit` (default) commits writes; `evaluate` always discards them.
    - timestamp: optional transaction time override.

    Returns `{"ok": True, "fcn", "result"}` or `{"ok": False, "fcn", "error": {type, message}}`
    for record-store and request errors. Other exceptions propagate after rollback.
    """
    fcn = event.get("fcn") if isinstance(event, dict) else None
    try:
        if not isinstance(event, dict):
            raise InvocationError("event must be an object")
        op = resolve_operation(fcn)
        args = _parse_args(op, event.get("args"))
        identity = event.get("identity")
        if not isinstance(identity, str) or not identity:
            raise InvocationError("identity is required")
        mode = event.get("mode") or MODE_SUBMIT
        if mode not in (MODE_SUBMIT, MODE_EVALUATE):
            raise InvocationError(f"Unknown mode: {mode}")
    except InvocationError as e:
        logger.warning("Rejected invocation of %r: %s", fcn, e)
        return _error_envelope(fcn if isinstance(fcn, str) else "", e)

    tx_state = BufferedWorldState(world_state)
    tx_kwargs: Dict[str, Any] = {"world_state": tx_state, "caller_identity": identity}
    if isinstance(event.get("timestamp"), str) and event["timestamp"]:
        tx_kwargs["timestamp"] = event["timestamp"]
    ctx = Transaction(**tx_kwargs)

    logger.info("Invoking %s (%s) for %s", op.name, mode, identity)
    try:
        result = op.call(ctx, *args)
    except RecordStoreError as e:
        tx_state.rollback()
        logger.warning("%s failed: %s", op.name, e)
        return _error_envelope(op.name, e)
    except Exception:
        tx_state.rollback()
        raise

    if mode == MODE_EVALUATE:
        tx_state.rollback()
    else:
        try:
            tx_state.commit()
        except Exception as ex:
            logger.warning("%s commit failed: %s", op.name, ex)
            return _error_envelope(op.name, BackendWriteError(f"failed to commit {op.name}: {ex}"))

    return {"ok": True, "fcn": op.name, "result": _to_result(result)}


_MEMORY_STATE: Optional[InMemoryWorldState] = None


def _world_state_from_env() -> WorldState:
    global _MEMORY_STATE
    backend = (getenv(ENV_BACKEND, "s3") or "s3").lower()
    if backend == "memory":
        if _MEMORY_STATE is None:
            _MEMORY_STATE = InMemoryWorldState()
        return _MEMORY_STATE
    if backend != "s3":
        raise RuntimeError(f"Unsupported {ENV_BACKEND}: {backend}")

    fernet_key = None
    prefix = getenv(ENV_PARAM_PREFIX)
    if prefix:
        params = load_ssm_params(prefix, ["fernet_key"])
        fernet_key = require(params.get("fernet_key"), f"{prefix}fernet_key")
    return S3WorldState.from_env(fernet_key=fernet_key)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """AWS Lambda entry for record-store invocations.

    Environment:
    - RECORDS_BACKEND: `s3` (default) or `memory`
    - RECORDS_BUCKET, RECORDS_PREFIX, RECORDS_FERNET_KEY for the S3 backend
    - PARAM_PREFIX (optional): SSM prefix providing `fernet_key`
    - LOG_LEVEL (default: INFO)
    """
    logging.getLogger().setLevel((getenv(ENV_LOG_LEVEL, "INFO") or "INFO").upper())
    return invoke(event, _world_state_from_env())
