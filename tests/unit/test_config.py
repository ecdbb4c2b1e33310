from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from common import config


def test_getenv_treats_empty_as_unset(monkeypatch):
    monkeypatch.setenv("RECORDS_X", "")
    assert config.getenv("RECORDS_X", "dflt") == "dflt"
    monkeypatch.setenv("RECORDS_X", "v")
    assert config.getenv("RECORDS_X", "dflt") == "v"


def test_require_raises_with_name():
    with pytest.raises(RuntimeError, match="Missing required configuration: THING"):
        config.require(None, "THING")
    assert config.require("ok", "THING") == "ok"


class _FakeSSM:
    def __init__(self, values, denied=()):
        self._values = values
        self._denied = set(denied)

    def get_parameter(self, *, Name, WithDecryption):
        if Name in self._denied:
            raise ClientError({"Error": {"Code": "AccessDeniedException"}}, "GetParameter")
        if Name not in self._values:
            raise ClientError({"Error": {"Code": "ParameterNotFound"}}, "GetParameter")
        return {"Parameter": {"Value": self._values[Name]}}


def test_load_ssm_params_maps_missing_and_denied_to_none(monkeypatch):
    fake = _FakeSSM({"/p/fernet_key": "abc", "/p/empty": ""}, denied={"/p/hidden"})
    monkeypatch.setattr("boto3.client", lambda *a, **k: fake)

    out = config.load_ssm_params("/p/", ["fernet_key", "empty", "hidden", "absent"])

    assert out == {"fernet_key": "abc", "empty": None, "hidden": None, "absent": None}


def test_load_ssm_params_reraises_other_errors(monkeypatch):
    class _Throttled:
        def get_parameter(self, **_kwargs):
            raise ClientError({"Error": {"Code": "ThrottlingException"}}, "GetParameter")

    monkeypatch.setattr("boto3.client", lambda *a, **k: _Throttled())
    with pytest.raises(ClientError):
        config.load_ssm_params("/p/", ["fernet_key"])
