from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def clear_svcclient_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("SVCCLIENT_"):
            monkeypatch.delenv(name, raising=False)
