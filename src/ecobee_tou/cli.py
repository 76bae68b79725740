"""Command-line interface for ecobee thermostat mode changes."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .auth import TokenRefresher
from .const import REQUEST_TIMEOUT, ExitCode, HvacMode
from .exceptions import ConfigError, EcobeeError
from .models import Operation, OperationResult, ThermostatDict
from .orchestrator import RetryOrchestrator, dry_run
from .payloads import render_payload
from .store import CredentialStore, default_config_path
from .transport import RequestExecutor

_LOGGER = logging.getLogger(__name__)

_MODE_MAP: dict[str, HvacMode] = {
    "heat": HvacMode.HEAT,
    "off": HvacMode.OFF,
    "aux": HvacMode.AUX,
    "auxheatonly": HvacMode.AUX,
    "cool": HvacMode.COOL,
    "auto": HvacMode.AUTO,
}

_SUPPORTED = "HEAT, OFF, AUX, COOL, AUTO"


def parse_mode(raw: str) -> HvacMode | None:
    """Map a case-insensitive mode keyword to its API value."""
    return _MODE_MAP.get(raw.strip().lower())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecobee-tou",
        description="Ecobee Thermostat mode control CLI",
        epilog="AUX maps to the auxHeatOnly mode.",
    )
    parser.add_argument(
        "mode", nargs="?", help=f"Mode to set (case-insensitive): {_SUPPORTED}"
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        "--no-run",
        dest="dry_run",
        action="store_true",
        help="Print the JSON payload without making changes",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--probe-thermostats",
        action="store_true",
        help="Query and print the full thermostat JSON (read-only)",
    )
    action.add_argument(
        "--get-current-mode",
        action="store_true",
        help="Print the current hvacMode of the target thermostat (read-only)",
    )
    action.add_argument(
        "--test-connection",
        action="store_true",
        help="Check that the API is reachable and the token works (read-only)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Credential file (default: ./ecobee.conf)",
    )
    parser.add_argument(
        "--thermostat-id",
        help="Target thermostat identifier (default: THERMOSTAT_ID in config)",
    )
    parser.add_argument(
        "--thermostat-name",
        help="Friendly name used in messages (default: THERMOSTAT_NAME in config)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def _print_thermostats(thermostats: list[ThermostatDict]) -> None:
    """Display a summary of each thermostat."""
    if not thermostats:
        print("No thermostats found.")
        return
    print("\nAvailable thermostats:")
    print("-" * 60)
    for t in thermostats:
        settings = t.get("settings", {})
        connected = t.get("runtime", {}).get("connected", False)
        print(f"ID: {t.get('identifier', 'Unknown')}")
        print(f"Name: {t.get('name', 'Unnamed')}")
        print(f"Model: {t.get('modelNumber', 'Unknown')}")
        print(f"Connected: {'Yes' if connected else 'No'}")
        print(f"Current Mode: {settings.get('hvacMode', 'unknown')}")
        print(f"Heat Stages: {settings.get('heatStages', 'unknown')}")
        print(f"Cool Stages: {settings.get('coolStages', 'unknown')}")
        print("-" * 60)


def _format_current_mode(thermostat: ThermostatDict) -> str:
    name = thermostat.get("name", "Unnamed")
    ident = thermostat.get("identifier", "unknown")
    mode = (
        thermostat.get("settings", {}).get("hvacMode")
        or thermostat.get("runtime", {}).get("actualMode")
        or "unknown"
    )
    return f"{name} ({ident}): {mode}"


def _report(result: OperationResult, target_name: str) -> None:
    """Print the one-line (or JSON) confirmation for a finished operation."""
    operation = result.operation
    if operation.name == "set-mode":
        print(
            f"Success: mode set to {operation.mode} "
            f"for thermostat '{target_name}'."
        )
    elif operation.name == "probe-thermostats":
        print(render_payload(result.data))
    elif operation.name == "get-current-mode":
        print(_format_current_mode(result.thermostats[0]))
    else:
        suffix = " after refresh" if result.outcome.refreshed else ""
        print(
            f"Connection OK{suffix}: API reachable and token accepted "
            "(status.code 0)."
        )
        _print_thermostats(result.thermostats)


def _target(
    args: argparse.Namespace, store: CredentialStore
) -> tuple[str, str]:
    """
    Resolve the thermostat id and display name.

    --thermostat-id wins over THERMOSTAT_ID in the credential file, which
    is only read when no id was given. THERMOSTAT_NAME is only used
    together with THERMOSTAT_ID.
    """
    thermostat_id = args.thermostat_id
    name = args.thermostat_name
    if not thermostat_id:
        record = store.read_raw()
        thermostat_id = str(record.get("THERMOSTAT_ID") or "")
        name = name or str(record.get("THERMOSTAT_NAME") or "")
    if not thermostat_id:
        raise ConfigError(
            "No thermostat id configured. Pass --thermostat-id or set "
            f"THERMOSTAT_ID in {store.path}"
        )
    return thermostat_id, name or thermostat_id


def _build_operation(
    args: argparse.Namespace, store: CredentialStore
) -> tuple[Operation, str]:
    if args.probe_thermostats:
        return Operation.probe_thermostats(), ""
    if args.test_connection:
        return Operation.test_connection(), ""
    thermostat_id, name = _target(args, store)
    if args.get_current_mode:
        return Operation.get_current_mode(thermostat_id), name
    mode = _MODE_MAP[args.mode.strip().lower()]
    return Operation.set_mode(thermostat_id, mode), name


def _usage_error(args: argparse.Namespace) -> str | None:
    """Return a usage problem with the parsed arguments, if any."""
    diagnostic = (
        args.probe_thermostats or args.get_current_mode or args.test_connection
    )
    if diagnostic and args.mode:
        return "A mode cannot be combined with a read-only command."
    if diagnostic and args.dry_run:
        return "--dry-run only applies to mode changes."
    if not diagnostic and not args.mode:
        return f"A MODE is required: {_SUPPORTED}"
    if args.mode and parse_mode(args.mode) is None:
        return f"Unsupported mode: {args.mode}. Supported: {_SUPPORTED}"
    return None


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    problem = _usage_error(args)
    if problem:
        parser.print_usage(sys.stderr)
        print(problem, file=sys.stderr)
        return ExitCode.CONFIG

    store = CredentialStore(args.config or default_config_path())
    try:
        operation, target_name = _build_operation(args, store)
        if args.dry_run:
            request = dry_run(operation)
            print(f"DRY RUN: Would {request.method} to {request.url} with JSON:")
            print(render_payload(request.payload))
            return ExitCode.SUCCESS

        credentials = store.load()
        with RequestExecutor(timeout=args.timeout) as executor:
            orchestrator = RetryOrchestrator(
                store, credentials, executor, TokenRefresher(executor)
            )
            result = orchestrator.run(operation)
    except EcobeeError as exc:
        _LOGGER.debug("%s failed", type(exc).__name__, exc_info=True)
        print(str(exc), file=sys.stderr)
        return exc.exit_code

    _report(result, target_name)
    return ExitCode.SUCCESS


def main() -> None:
    """Entry point for the ecobee-tou CLI."""
    sys.exit(run())
