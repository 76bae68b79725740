"""Credential file loading and atomic persistence."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import orjson

from .const import CONFIG_FILENAME
from .exceptions import ConfigInvalidError, ConfigMissingError, ConfigWriteError
from .models import Credentials

_LOGGER = logging.getLogger(__name__)

KEY_CLIENT_ID = "API_KEY"
KEY_ACCESS_TOKEN = "ACCESS_TOKEN"
KEY_REFRESH_TOKEN = "REFRESH_TOKEN"


def default_config_path(directory: Path | None = None) -> Path:
    """Return the credential file path, defaulting to the current directory."""
    base = directory or Path.cwd()
    return base / CONFIG_FILENAME


class CredentialStore:
    """
    JSON file holding API_KEY, ACCESS_TOKEN and REFRESH_TOKEN.

    The file is created by the user's setup step; this class only reads it
    and rewrites the token fields. There is no cross-process locking, so two
    invocations that both refresh will race and the last writer wins.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        """Return the credential file path."""
        return self._path

    def read_raw(self) -> dict[str, Any]:
        """
        Read the whole credential record.

        Raises:
            ConfigMissingError: If the file does not exist.
            ConfigInvalidError: If it is empty or not a JSON object.

        """
        try:
            content = self._path.read_bytes()
        except FileNotFoundError as exc:
            raise ConfigMissingError(
                f"{self._path} not found. Please create one with "
                f"{KEY_CLIENT_ID}, {KEY_ACCESS_TOKEN} and {KEY_REFRESH_TOKEN}."
            ) from exc
        except OSError as exc:
            raise ConfigInvalidError(f"Cannot read {self._path}: {exc}") from exc
        if not content.strip():
            raise ConfigInvalidError(f"Config file is empty: {self._path}")
        try:
            record = orjson.loads(content)
        except orjson.JSONDecodeError as exc:
            raise ConfigInvalidError(
                f"JSON decode error in {self._path}: {exc}"
            ) from exc
        if not isinstance(record, dict):
            raise ConfigInvalidError(f"{self._path} must contain a JSON object")
        return record

    def load(self) -> Credentials:
        """
        Load credentials from the file.

        Raises:
            ConfigMissingError: If the file does not exist.
            ConfigInvalidError: If the file is unusable or API_KEY or
                ACCESS_TOKEN is missing.

        """
        record = self.read_raw()
        for key in (KEY_CLIENT_ID, KEY_ACCESS_TOKEN):
            value = record.get(key)
            if not isinstance(value, str) or not value:
                raise ConfigInvalidError(f"{key} not found in {self._path}")
        refresh = record.get(KEY_REFRESH_TOKEN)
        return Credentials(
            client_id=record[KEY_CLIENT_ID],
            access_token=record[KEY_ACCESS_TOKEN],
            refresh_token=refresh if isinstance(refresh, str) else "",
        )

    def persist(self, credentials: Credentials) -> None:
        """
        Write refreshed tokens back, keeping every other key in place.

        REFRESH_TOKEN is only rewritten when the credentials carry one.

        Raises:
            ConfigWriteError: If the file cannot be read back or written.

        """
        try:
            record = self.read_raw()
        except (ConfigMissingError, ConfigInvalidError) as exc:
            raise ConfigWriteError(
                f"Cannot update {self._path}: {exc}"
            ) from exc
        record[KEY_ACCESS_TOKEN] = credentials.access_token
        if credentials.refresh_token:
            record[KEY_REFRESH_TOKEN] = credentials.refresh_token
        try:
            _write_atomic(self._path, record)
        except OSError as exc:
            raise ConfigWriteError(f"Cannot write {self._path}: {exc}") from exc
        _LOGGER.info("Refreshed tokens saved to %s", self._path)


def _write_atomic(path: Path, record: dict[str, Any]) -> None:
    """Write the record to a temp file and rename it over path."""
    tmp_path = path.with_suffix(".tmp")
    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        os.write(
            fd,
            orjson.dumps(
                record, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
            ),
        )
        os.fsync(fd)
    finally:
        os.close(fd)
    tmp_path.replace(path)
