from __future__ import annotations

import pytest

from userinfo_pages.config import CONFIG_ENV


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch) -> None:
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv("USERINFO_BIND", raising=False)
    monkeypatch.delenv("USERINFO_PORT", raising=False)
