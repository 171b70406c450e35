from __future__ import annotations

import pytest

from tests.support.backend import FakeProfileBackend

_ENV_VARS = (
    "PROFILESYNC_API_BASE_URL",
    "PROFILESYNC_HTTP_TIMEOUT",
    "PROFILESYNC_PROVISIONING_POLICY",
    "PROFILESYNC_CREATE_MISSING",
    "PROFILESYNC_SINGLE_TOKEN_NAMES",
    "PROFILESYNC_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def backend() -> FakeProfileBackend:
    return FakeProfileBackend()
