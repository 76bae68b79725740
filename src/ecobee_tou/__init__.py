"""Ecobee thermostat mode control with automatic token refresh."""

__version__ = "1.0.0"

from .auth import TokenRefresher
from .const import API_BASE, TOKEN_URL, ExitCode, HvacMode, OperationKind
from .exceptions import (
    ApiError,
    ConfigError,
    ConfigInvalidError,
    ConfigMissingError,
    ConfigWriteError,
    EcobeeError,
    EcobeeTransportError,
    NotFoundError,
    ProtocolError,
    RefreshFailedError,
    TokenUnavailableError,
)
from .models import (
    Credentials,
    HttpResponse,
    Operation,
    OperationResult,
    RequestOutcome,
    TokenGrant,
)
from .orchestrator import RetryOrchestrator, classify, dry_run, is_token_expired
from .store import CredentialStore
from .transport import RequestExecutor

__all__ = [
    "API_BASE",
    "TOKEN_URL",
    "ApiError",
    "ConfigError",
    "ConfigInvalidError",
    "ConfigMissingError",
    "ConfigWriteError",
    "CredentialStore",
    "Credentials",
    "EcobeeError",
    "EcobeeTransportError",
    "ExitCode",
    "HttpResponse",
    "HvacMode",
    "NotFoundError",
    "Operation",
    "OperationKind",
    "OperationResult",
    "ProtocolError",
    "RefreshFailedError",
    "RequestExecutor",
    "RequestOutcome",
    "RetryOrchestrator",
    "TokenGrant",
    "TokenRefresher",
    "TokenUnavailableError",
    "classify",
    "dry_run",
    "is_token_expired",
]
