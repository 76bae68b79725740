"""Constants and enums for the ecobee thermostat API."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class HvacMode(StrEnum):
    """Thermostat operating mode, as the API spells it."""

    HEAT = "heat"
    OFF = "off"
    AUX = "auxHeatOnly"
    COOL = "cool"
    AUTO = "auto"


class OperationKind(StrEnum):
    """Whether an operation only reads or also changes thermostat state."""

    READ = "read"
    WRITE = "write"


class ExitCode(IntEnum):
    """
    Process exit status reported to the caller.

    Job runners rely on these staying distinct: exhausted credentials,
    a rejected value and an unreachable network each get their own code.
    """

    SUCCESS = 0
    CONFIG = 2
    TOKEN_UNAVAILABLE = 3
    REFRESH_FAILED = 4
    API_ERROR = 5
    OTHER = 6


API_BASE = "https://api.ecobee.com/1"
TOKEN_URL = "https://api.ecobee.com/token"
THERMOSTAT_PATH = "/thermostat"

CONFIG_FILENAME = "ecobee.conf"
REQUEST_TIMEOUT = 30  # seconds, per HTTP exchange

# Substrings (matched case-insensitively) that mark an expired access token
# in a response body. The API sometimes reports expiry inside a 200 response.
EXPIRY_MARKERS = ("invalid access token", "expired", "unauthorized")

READ_CONTENT_TYPE = "text/json"
WRITE_CONTENT_TYPE = "application/json;charset=UTF-8"
