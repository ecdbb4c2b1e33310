from __future__ import annotations

import os
from typing import Dict, Iterable, Optional


def getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.environ.get(name)
    return val if val not in (None, "") else default


def require(v: Optional[str], what: str) -> str:
    if not v:
        raise RuntimeError(f"Missing required configuration: {what}")
    return v


def load_ssm_params(prefix: str, names: Iterable[str]) -> Dict[str, Optional[str]]:
    """Fetch decrypted SSM parameters `{prefix}{name}`; missing or denied ones map to None."""
    import boto3
    from botocore.exceptions import ClientError

    ssm = boto3.client("ssm")
    names = list(names)
    out: Dict[str, Optional[str]] = {k: None for k in names}
    for name in names:
        full = f"{prefix}{name}"
        try:
            resp = ssm.get_parameter(Name=full, WithDecryption=True)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("ParameterNotFound", "AccessDeniedException"):
                out[name] = None
                continue
            raise
        val = resp.get("Parameter", {}).get("Value")
        out[name] = val if isinstance(val, str) and val != "" else None
    return out


__all__ = ["getenv", "require", "load_ssm_params"]
