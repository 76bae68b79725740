"""Data models for credentials, operations, and API responses."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, TypedDict

from .const import HvacMode, OperationKind
from .payloads import (
    build_current_mode_selection,
    build_probe_selection,
    build_set_mode_payload,
    build_test_connection_selection,
)

# ---------------------------------------------------------------------------
# Response TypedDicts: match the wire format of the thermostat endpoint
# ---------------------------------------------------------------------------


class StatusDict(TypedDict):
    """Status envelope carried by every thermostat response."""

    code: int
    message: str


class SettingsDict(TypedDict, total=False):
    """Subset of thermostat settings this tool reads."""

    hvacMode: str
    heatStages: int
    coolStages: int


class RuntimeDict(TypedDict, total=False):
    """Subset of thermostat runtime this tool reads."""

    connected: bool
    actualMode: str


class ThermostatDict(TypedDict, total=False):
    """A single thermostat record from ``thermostatList``."""

    identifier: str
    name: str
    modelNumber: str
    settings: SettingsDict
    runtime: RuntimeDict


class TokenResponse(TypedDict, total=False):
    """Body of a successful refresh-token grant."""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int
    scope: str


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Credentials:
    """
    Credentials for one ecobee application/account pair.

    client_id and access_token are always non-empty after a load.
    refresh_token is empty when the credential file has none.
    """

    client_id: str
    access_token: str
    refresh_token: str = ""

    def with_grant(self, grant: TokenGrant) -> Credentials:
        """Return a copy carrying the tokens from a refresh grant."""
        return replace(
            self,
            access_token=grant.access_token,
            refresh_token=grant.refresh_token or self.refresh_token,
        )


@dataclass(frozen=True)
class TokenGrant:
    """Tokens issued by a refresh exchange.

    refresh_token is None when the server did not rotate it.
    """

    access_token: str
    refresh_token: str | None = None


# ---------------------------------------------------------------------------
# Operations and outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Operation:
    """
    One unit of work submitted to the retry orchestrator.

    payload is the selection body for reads and the full update body for
    writes. Only writes persist refreshed credentials; diagnostic reads
    must leave the credential file untouched.
    """

    kind: OperationKind
    name: str
    payload: dict[str, Any]
    thermostat_id: str = ""
    mode: HvacMode | None = None
    allow_persist_refresh: bool = False
    expect_entities: bool = False

    @classmethod
    def set_mode(cls, thermostat_id: str, mode: HvacMode) -> Operation:
        """Change the HVAC mode of one thermostat."""
        return cls(
            kind=OperationKind.WRITE,
            name="set-mode",
            payload=build_set_mode_payload(thermostat_id, mode),
            thermostat_id=thermostat_id,
            mode=mode,
            allow_persist_refresh=True,
        )

    @classmethod
    def probe_thermostats(cls) -> Operation:
        """Read every registered thermostat with runtime, settings and sensors."""
        return cls(
            kind=OperationKind.READ,
            name="probe-thermostats",
            payload=build_probe_selection(),
        )

    @classmethod
    def get_current_mode(cls, thermostat_id: str) -> Operation:
        """Read the settings and runtime of one thermostat."""
        return cls(
            kind=OperationKind.READ,
            name="get-current-mode",
            payload=build_current_mode_selection(thermostat_id),
            thermostat_id=thermostat_id,
            expect_entities=True,
        )

    @classmethod
    def test_connection(cls) -> Operation:
        """Minimal read that proves the API is reachable and the token works."""
        return cls(
            kind=OperationKind.READ,
            name="test-connection",
            payload=build_test_connection_selection(),
        )


@dataclass(frozen=True)
class HttpResponse:
    """Status code and raw body of a single HTTP exchange."""

    status: int
    body: str


@dataclass(frozen=True)
class RequestOutcome:
    """The final HTTP response of an operation, as seen by classification."""

    http_status: int
    body: str
    api_status_code: int | None = None
    refreshed: bool = False


@dataclass(frozen=True)
class OperationResult:
    """A successfully classified operation."""

    operation: Operation
    outcome: RequestOutcome
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def thermostats(self) -> list[ThermostatDict]:
        """Return the ``thermostatList`` of a read response."""
        return list(self.data.get("thermostatList") or [])


@dataclass(frozen=True)
class DryRunRequest:
    """A fully built request that was not sent."""

    method: str
    url: str
    payload: dict[str, Any]
