"""Shared fixtures for ecobee_tou tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import orjson
import pytest

from ecobee_tou.auth import TokenRefresher
from ecobee_tou.models import Credentials, HttpResponse, TokenGrant
from ecobee_tou.orchestrator import RetryOrchestrator
from ecobee_tou.store import CredentialStore
from ecobee_tou.transport import RequestExecutor

CONFIG = {
    "API_KEY": "client-123",
    "ACCESS_TOKEN": "old-access",
    "REFRESH_TOKEN": "old-refresh",
    "THERMOSTAT_ID": "123456789",
    "THERMOSTAT_NAME": "Downstairs",
}


def envelope(code: int = 0, message: str = "", **extra: Any) -> str:
    """Build a thermostat response body with a status envelope."""
    body: dict[str, Any] = {"status": {"code": code, "message": message}}
    body.update(extra)
    return orjson.dumps(body).decode()


def make_response(status: int = 200, body: str | None = None) -> HttpResponse:
    """Build an HttpResponse, defaulting to a successful envelope."""
    return HttpResponse(status=status, body=envelope() if body is None else body)


EXPIRED_BODY = envelope(14, "Authentication token has expired. Refresh your tokens.")


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Write a complete credential file and return its path."""
    path = tmp_path / "ecobee.conf"
    path.write_bytes(orjson.dumps(CONFIG, option=orjson.OPT_INDENT_2))
    return path


@pytest.fixture
def store(config_path: Path) -> CredentialStore:
    return CredentialStore(config_path)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        client_id="client-123",
        access_token="old-access",
        refresh_token="old-refresh",
    )


@pytest.fixture
def executor() -> MagicMock:
    """Return a mock RequestExecutor; set send.side_effect per test."""
    return MagicMock(spec=RequestExecutor)


@pytest.fixture
def refresher() -> MagicMock:
    """Return a mock TokenRefresher that issues a rotated pair."""
    mock = MagicMock(spec=TokenRefresher)
    mock.refresh.return_value = TokenGrant(
        access_token="new-access", refresh_token="new-refresh"
    )
    return mock


@pytest.fixture
def orchestrator(
    store: CredentialStore,
    credentials: Credentials,
    executor: MagicMock,
    refresher: MagicMock,
) -> RetryOrchestrator:
    return RetryOrchestrator(store, credentials, executor, refresher)
