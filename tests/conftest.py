import os
import sys

import pytest


def pytest_configure():
    # Top-level packages live under src/ (`records`, `common`, `invoke`)
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    src_path = os.path.join(root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


@pytest.fixture(autouse=True)
def _isolate_records_env(monkeypatch):
    # Keep a developer's shell configuration out of backend resolution
    for name in list(os.environ):
        if name.startswith("RECORDS_") or name in ("PARAM_PREFIX", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
