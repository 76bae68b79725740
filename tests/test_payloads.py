"""Tests for request body builders."""

from __future__ import annotations

import orjson

from ecobee_tou.const import HvacMode
from ecobee_tou.payloads import (
    build_current_mode_selection,
    build_probe_selection,
    build_set_mode_payload,
    build_test_connection_selection,
    encode_payload,
    render_payload,
)


def test_set_mode_payload() -> None:
    assert build_set_mode_payload("123456789", HvacMode.AUX) == {
        "selection": {
            "selectionType": "thermostats",
            "selectionMatch": "123456789",
        },
        "thermostat": {"settings": {"hvacMode": "auxHeatOnly"}},
    }


def test_probe_selection() -> None:
    selection = build_probe_selection()["selection"]
    assert selection["selectionType"] == "registered"
    assert selection["includeRuntime"] is True
    assert selection["includeSettings"] is True
    assert selection["includeSensors"] is True


def test_current_mode_selection_targets_one_thermostat() -> None:
    selection = build_current_mode_selection("42")["selection"]
    assert selection == {
        "selectionType": "thermostats",
        "selectionMatch": "42",
        "includeSettings": True,
        "includeRuntime": True,
    }


def test_test_connection_selection_is_minimal() -> None:
    selection = build_test_connection_selection()["selection"]
    assert selection["selectionType"] == "registered"
    assert selection["includeSettings"] is False


def test_encode_is_compact() -> None:
    encoded = encode_payload({"a": {"b": 1}})
    assert encoded == '{"a":{"b":1}}'


def test_render_parses_back_to_same_payload() -> None:
    payload = build_set_mode_payload("1", HvacMode.HEAT)
    rendered = render_payload(payload)
    assert "\n" in rendered
    assert orjson.loads(rendered) == payload
