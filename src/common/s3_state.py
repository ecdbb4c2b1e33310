from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.exceptions import ClientError
from cryptography.fernet import Fernet, InvalidToken

from .config import getenv, require


# Environment variable names for convenience configuration
ENV_BUCKET = "RECORDS_BUCKET"
ENV_PREFIX = "RECORDS_PREFIX"
ENV_FERNET_KEY = "RECORDS_FERNET_KEY"

# Backward-compatible fallback
FALLBACK_ENV_BUCKET = "RECORDS_STATE_BUCKET"

DEFAULT_PREFIX = "world-state/"


def _to_fernet(key: str | bytes) -> Fernet:
    """Construct a Fernet instance from a user-provided key.

    The key must be a URL-safe base64-encoded 32-byte key (str or bytes),
    as returned by `cryptography.fernet.Fernet.generate_key()`.
    """
    if isinstance(key, str):
        key_bytes = key.encode("utf-8")
    else:
        key_bytes = key
    return Fernet(key_bytes)


@dataclass
class S3ObjectRef:
    bucket: str
    key: str


class S3WorldState:
    """
    S3-backed world state: one object per record key, optionally Fernet-encrypted.

    Usage
    - Objects live at `s3://{bucket}/{prefix}{key}`.
    - `get_state(key)` returns None when the object does not exist.
    - `put_state(key, value)` overwrites unconditionally; `del_state(key)` is
      idempotent (S3 DeleteObject succeeds for missing keys).

    Environment variables (for `from_env`)
    - `RECORDS_BUCKET`:     bucket holding the world state (fallback `RECORDS_STATE_BUCKET`)
    - `RECORDS_PREFIX`:     key prefix, default `world-state/`
    - `RECORDS_FERNET_KEY`: optional urlsafe base64 Fernet key for encryption at rest
    """

    def __init__(
        self,
        *,
        s3: Optional[object] = None,
        bucket: str,
        prefix: str = DEFAULT_PREFIX,
        fernet_key: str | bytes | None = None,
        region_name: Optional[str] = None,
    ) -> None:
        self._s3 = s3 or boto3.client("s3", region_name=region_name)
        self._bucket = bucket
        self._prefix = prefix
        self._fernet = _to_fernet(fernet_key) if fernet_key else None

    # -------- Construction helpers --------
    @classmethod
    def from_env(cls, *, fernet_key: str | bytes | None = None) -> "S3WorldState":
        bucket = getenv(ENV_BUCKET) or getenv(FALLBACK_ENV_BUCKET)
        bucket = require(bucket, ENV_BUCKET)
        prefix = getenv(ENV_PREFIX, DEFAULT_PREFIX)
        return cls(bucket=bucket, prefix=prefix, fernet_key=fernet_key or getenv(ENV_FERNET_KEY))

    def ref(self, key: str) -> S3ObjectRef:
        return S3ObjectRef(bucket=self._bucket, key=f"{self._prefix}{key}")

    # -------- World-state operations --------
    def get_state(self, key: str) -> Optional[bytes]:
        """Read (and decrypt) the bytes stored under `key`.

        Raises:
        - ValueError if decryption fails.
        - botocore.exceptions.ClientError for S3 errors other than a missing object.
        """
        obj = self.ref(key)
        try:
            resp = self._s3.get_object(Bucket=obj.bucket, Key=obj.key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("NoSuchKey", "404"):
                return None
            raise

        body = resp["Body"].read()
        if self._fernet is None:
            return body
        try:
            return self._fernet.decrypt(body)
        except InvalidToken as ex:
            raise ValueError(f"Failed to decrypt s3://{obj.bucket}/{obj.key}: invalid Fernet token") from ex

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise ValueError("key must be a non-empty string")
        obj = self.ref(key)
        body = self._fernet.encrypt(value) if self._fernet is not None else value
        self._s3.put_object(
            Bucket=obj.bucket,
            Key=obj.key,
            Body=body,
            ContentType="application/octet-stream",
        )

    def del_state(self, key: str) -> None:
        obj = self.ref(key)
        self._s3.delete_object(Bucket=obj.bucket, Key=obj.key)


__all__ = ["S3WorldState", "S3ObjectRef"]
