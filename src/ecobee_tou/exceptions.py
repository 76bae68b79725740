"""Exception classes for ecobee_tou."""

from __future__ import annotations

from .const import ExitCode


class EcobeeError(Exception):
    """Base exception for ecobee_tou."""

    exit_code: ExitCode = ExitCode.OTHER


class ConfigError(EcobeeError):
    """The credential file could not be used."""

    exit_code = ExitCode.CONFIG


class ConfigMissingError(ConfigError):
    """The credential file does not exist."""


class ConfigInvalidError(ConfigError):
    """The credential file is empty, malformed, or lacks a required key."""


class ConfigWriteError(ConfigError):
    """Refreshed credentials could not be written back."""


class TokenUnavailableError(EcobeeError):
    """The access token expired and no refresh token is stored."""

    exit_code = ExitCode.TOKEN_UNAVAILABLE


class RefreshFailedError(EcobeeError):
    """The token endpoint did not issue a new access token."""

    exit_code = ExitCode.REFRESH_FAILED

    def __init__(self, message: str, response: str = "") -> None:
        super().__init__(message)
        self.response = response


class EcobeeTransportError(EcobeeError):
    """The HTTP exchange failed below the HTTP layer (DNS, TCP, TLS)."""


class ProtocolError(EcobeeError):
    """The API answered with something that is not a usable envelope."""

    def __init__(self, message: str, http_status: int, body: str) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.body = body


class ApiError(EcobeeError):
    """The API parsed the request and rejected it with a non-zero code."""

    exit_code = ExitCode.API_ERROR

    def __init__(self, message: str, code: int, body: str) -> None:
        super().__init__(message)
        self.code = code
        self.body = body


class NotFoundError(EcobeeError):
    """A read for a specific thermostat returned no thermostats."""

    def __init__(self, message: str, body: str) -> None:
        super().__init__(message)
        self.body = body
