"""Request/refresh/retry state machine for thermostat operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import orjson

from .const import (
    API_BASE,
    EXPIRY_MARKERS,
    READ_CONTENT_TYPE,
    THERMOSTAT_PATH,
    WRITE_CONTENT_TYPE,
    OperationKind,
)
from .exceptions import (
    ApiError,
    NotFoundError,
    ProtocolError,
    TokenUnavailableError,
)
from .models import (
    Credentials,
    DryRunRequest,
    HttpResponse,
    Operation,
    OperationResult,
    RequestOutcome,
)
from .payloads import encode_payload

if TYPE_CHECKING:
    from .auth import TokenRefresher
    from .store import CredentialStore
    from .transport import RequestExecutor

_LOGGER = logging.getLogger(__name__)


def is_token_expired(status: int, body: str) -> bool:
    """
    Return True if a response means the access token is no longer valid.

    The API sometimes reports an expired token inside a 200 response with a
    non-zero status code, so the body is checked for EXPIRY_MARKERS as well
    as the HTTP status. This over-approximates: any body that merely
    mentions "expired" also counts.
    """
    if status == 401:
        return True
    lowered = body.lower()
    return any(marker in lowered for marker in EXPIRY_MARKERS)


def _parse_status_code(data: Any) -> int | None:
    """Return status.code from a parsed envelope, or None if absent."""
    if not isinstance(data, dict):
        return None
    status = data.get("status")
    if not isinstance(status, dict):
        return None
    code = status.get("code")
    if isinstance(code, bool) or not isinstance(code, int):
        return None
    return code


def classify(
    operation: Operation, response: HttpResponse, *, refreshed: bool = False
) -> OperationResult:
    """
    Turn the final HTTP response of an operation into a result.

    Raises:
        ApiError: The envelope carries a non-zero status.code.
        ProtocolError: The body is not an envelope with a status code, or
            reports success under a non-200 HTTP status.
        NotFoundError: A read for a specific thermostat returned none.

    """
    try:
        data = orjson.loads(response.body) if response.body else None
    except orjson.JSONDecodeError:
        data = None
    code = _parse_status_code(data)
    if code is None:
        raise ProtocolError(
            f"HTTP {response.status} - API response: {response.body}",
            response.status,
            response.body,
        )
    if code != 0:
        message = data["status"].get("message") or "Unknown error"
        raise ApiError(
            f"API returned non-zero status {code} ({message}): {response.body}",
            code,
            response.body,
        )
    if response.status != 200:
        raise ProtocolError(
            f"HTTP {response.status} - API response: {response.body}",
            response.status,
            response.body,
        )
    if operation.expect_entities and not data.get("thermostatList"):
        raise NotFoundError(
            f"Thermostat {operation.thermostat_id} not found: {response.body}",
            response.body,
        )
    return OperationResult(
        operation=operation,
        outcome=RequestOutcome(
            http_status=response.status,
            body=response.body,
            api_status_code=code,
            refreshed=refreshed,
        ),
        data=data,
    )


@dataclass(frozen=True)
class PreparedRequest:
    """Method, URL and encoded body of a thermostat request."""

    method: str
    url: str
    content_type: str
    body: str | None = None
    params: dict[str, str] | None = None


def prepare_request(
    operation: Operation, api_base: str = API_BASE
) -> PreparedRequest:
    """
    Build the HTTP request for an operation.

    Reads are a GET with the selection JSON in the ``body`` query parameter.
    Writes POST the JSON payload.
    """
    url = api_base.rstrip("/") + THERMOSTAT_PATH
    encoded = encode_payload(operation.payload)
    if operation.kind is OperationKind.WRITE:
        return PreparedRequest(
            method="POST",
            url=url,
            content_type=WRITE_CONTENT_TYPE,
            body=encoded,
            params={"format": "json"},
        )
    return PreparedRequest(
        method="GET",
        url=url,
        content_type=READ_CONTENT_TYPE,
        params={"format": "json", "body": encoded},
    )


def dry_run(operation: Operation, api_base: str = API_BASE) -> DryRunRequest:
    """Build the request an operation would send, without sending it."""
    request = prepare_request(operation, api_base)
    return DryRunRequest(
        method=request.method,
        url=f"{request.url}?{urlencode(request.params or {})}",
        payload=operation.payload,
    )


class RetryOrchestrator:
    """
    Run one operation with at most one token refresh and one retry.

    Per operation this makes at most three outbound calls: the original
    request, the refresh exchange, and the retried request. Refreshed tokens
    are kept in memory for the life of the orchestrator and written to the
    credential store only for operations that allow it.
    """

    def __init__(
        self,
        store: CredentialStore,
        credentials: Credentials,
        executor: RequestExecutor,
        refresher: TokenRefresher,
        *,
        api_base: str = API_BASE,
    ) -> None:
        self._store = store
        self._credentials = credentials
        self._executor = executor
        self._refresher = refresher
        self._api_base = api_base.rstrip("/")

    @property
    def credentials(self) -> Credentials:
        """Return the credentials currently in use."""
        return self._credentials

    def _send(self, request: PreparedRequest) -> HttpResponse:
        return self._executor.send(
            request.method,
            request.url,
            {
                "Content-Type": request.content_type,
                "Authorization": f"Bearer {self._credentials.access_token}",
            },
            body=request.body,
            params=request.params,
        )

    def run(self, operation: Operation) -> OperationResult:
        """
        Execute an operation, refreshing the access token once if needed.

        Raises:
            TokenUnavailableError: The token expired and no refresh token exists.
            RefreshFailedError: The refresh exchange failed.
            ConfigWriteError: Refreshed tokens could not be persisted.
            EcobeeTransportError: No HTTP response was received.
            ApiError, ProtocolError, NotFoundError: See classify().

        """
        request = prepare_request(operation, self._api_base)
        response = self._send(request)
        if not is_token_expired(response.status, response.body):
            return classify(operation, response)

        _LOGGER.debug(
            "%s: token expired (HTTP %s)", operation.name, response.status
        )
        if not self._credentials.refresh_token:
            raise TokenUnavailableError(
                "Access token expired and no REFRESH_TOKEN available in "
                f"{self._store.path}"
            )
        grant = self._refresher.refresh(
            self._credentials.refresh_token, self._credentials.client_id
        )
        self._credentials = self._credentials.with_grant(grant)
        if operation.allow_persist_refresh:
            self._store.persist(self._credentials)
        else:
            _LOGGER.info(
                "Refreshed token kept in memory only (read-only operation)"
            )

        response = self._send(request)
        return classify(operation, response, refreshed=True)
