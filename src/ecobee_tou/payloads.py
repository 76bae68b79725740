"""Request bodies for the thermostat endpoint."""

from __future__ import annotations

from typing import Any

import orjson

from .const import HvacMode


def build_set_mode_payload(thermostat_id: str, mode: HvacMode) -> dict[str, Any]:
    """Return the update body that sets hvacMode on one thermostat."""
    return {
        "selection": {
            "selectionType": "thermostats",
            "selectionMatch": thermostat_id,
        },
        "thermostat": {
            "settings": {
                "hvacMode": str(mode),
            },
        },
    }


def build_probe_selection() -> dict[str, Any]:
    return {
        "selection": {
            "selectionType": "registered",
            "selectionMatch": "",
            "includeRuntime": True,
            "includeSettings": True,
            "includeSensors": True,
        }
    }


def build_current_mode_selection(thermostat_id: str) -> dict[str, Any]:
    return {
        "selection": {
            "selectionType": "thermostats",
            "selectionMatch": thermostat_id,
            "includeSettings": True,
            "includeRuntime": True,
        }
    }


def build_test_connection_selection() -> dict[str, Any]:
    return {
        "selection": {
            "selectionType": "registered",
            "selectionMatch": "",
            "includeSettings": False,
        }
    }


def encode_payload(payload: dict[str, Any]) -> str:
    """Encode a payload as compact JSON, the form sent on the wire."""
    return orjson.dumps(payload).decode()


def render_payload(payload: dict[str, Any]) -> str:
    """Encode a payload as indented JSON for display."""
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode()
