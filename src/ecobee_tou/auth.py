"""Refresh-token exchange against the ecobee token endpoint."""

from __future__ import annotations

import logging

import orjson

from .const import TOKEN_URL
from .exceptions import EcobeeTransportError, RefreshFailedError
from .models import TokenGrant
from .transport import RequestExecutor

_LOGGER = logging.getLogger(__name__)


class TokenRefresher:
    """Mint a new access token from a refresh token. Never retries."""

    def __init__(self, executor: RequestExecutor, token_url: str = TOKEN_URL) -> None:
        self._executor = executor
        self._token_url = token_url

    def refresh(self, refresh_token: str, client_id: str) -> TokenGrant:
        """
        Exchange a refresh token for a new access token.

        Returns:
            TokenGrant whose refresh_token is None if the server kept the old one.

        Raises:
            RefreshFailedError: On a transport failure, a non-JSON body, or a
                response without an access_token. The raw body is attached.

        """
        _LOGGER.info("Access token appears expired; attempting refresh")
        try:
            resp = self._executor.send(
                "POST",
                self._token_url,
                {"Content-Type": "application/x-www-form-urlencoded"},
                body={
                    "grant_type": "refresh_token",
                    "refresh_token": refresh_token,
                    "client_id": client_id,
                },
            )
        except EcobeeTransportError as exc:
            raise RefreshFailedError(f"Token refresh failed: {exc}") from exc

        try:
            data = orjson.loads(resp.body)
        except orjson.JSONDecodeError as exc:
            raise RefreshFailedError(
                f"Token refresh failed: HTTP {resp.status} {resp.body}", resp.body
            ) from exc

        access = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(access, str) or not access:
            raise RefreshFailedError(
                f"Token refresh failed: HTTP {resp.status} {resp.body}", resp.body
            )
        rotated = data.get("refresh_token")
        _LOGGER.info(
            "Token refresh succeeded%s",
            " (refresh token rotated)" if rotated else "",
        )
        return TokenGrant(
            access_token=access,
            refresh_token=rotated if isinstance(rotated, str) and rotated else None,
        )
