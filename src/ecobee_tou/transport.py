"""Single-exchange HTTP executor for the ecobee API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from .const import REQUEST_TIMEOUT
from .exceptions import EcobeeTransportError
from .models import HttpResponse

if TYPE_CHECKING:
    from typing import Self

_LOGGER = logging.getLogger(__name__)


class RequestExecutor:
    """
    Perform exactly one HTTP exchange per send().

    Any HTTP status, 4xx and 5xx included, comes back as an HttpResponse.
    Only failures below HTTP (DNS, TCP, TLS, timeout) raise.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        """Return the per-request timeout in seconds."""
        return self._timeout

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> HttpResponse:
        """
        Send one request and capture its status and raw body.

        Raises:
            EcobeeTransportError: If no HTTP response was received.

        """
        _LOGGER.debug("HTTP %s %s", method, url)
        try:
            resp = self._session.request(
                method,
                url,
                headers=headers,
                data=body,
                params=params,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise EcobeeTransportError(
                f"{method} {url} failed: {exc}"
            ) from exc
        _LOGGER.debug(
            "HTTP %s %s -> %s, %d bytes",
            method,
            url,
            resp.status_code,
            len(resp.content),
        )
        return HttpResponse(status=resp.status_code, body=resp.text)

    def close(self) -> None:
        """Close the session if this executor created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
