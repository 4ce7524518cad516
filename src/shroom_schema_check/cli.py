from __future__ import annotations

import argparse
import logging
import sys

from shroom_schema_check import __version__
from shroom_schema_check.config import (
    DEFAULT_ROOT,
    DEFAULT_SETTINGS_PATH,
    DEFAULT_SHARED_SCHEMA,
    CheckSettings,
    SettingsCheckOptions,
)
from shroom_schema_check.errors import SettingsError, ValidatorNotFound

EXIT_CONFIG_ERROR = 2
EXIT_VALIDATOR_NOT_FOUND = 127

logger = logging.getLogger("shroom_schema_check")


def _configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _status_from_returncode(returncode: int) -> int:
    # Killed by a signal: report it the way a shell would.
    if returncode < 0:
        return 128 - returncode
    return returncode


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shroom-schema-check",
        description="Check exported item dumps against their JSON schemas.",
    )
    parser.add_argument("--version", action="version", version=f"shroom-schema-check {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
    sub = parser.add_subparsers(dest="command")

    items = sub.add_parser("items", help="Run the external validator over items/<Category>/<id>.img/img.json (default)")
    items.add_argument("--root", type=str, help="Directory to scan and run the validator in")
    items.add_argument("--category", type=str, help="Item category directory under items/")
    items.add_argument("--schema", type=str, help="Schema file passed as --schemafile")
    items.add_argument("--validator", type=str, help="Validator executable")

    settings = sub.add_parser("settings", help="Validate files mapped by the editor json.schemas settings")
    settings.add_argument("filter", nargs="?", help="Only check mappings whose url contains this text")
    settings.add_argument("--root", default=DEFAULT_ROOT)
    settings.add_argument("--settings", default=DEFAULT_SETTINGS_PATH, help="Settings file, relative to --root")
    settings.add_argument(
        "--shared-schema",
        default=DEFAULT_SHARED_SCHEMA,
        help="Schema every external $ref resolves to, relative to --root",
    )
    return parser


def _item_settings(args: argparse.Namespace) -> CheckSettings:
    return CheckSettings.from_env().with_overrides(
        root=getattr(args, "root", None),
        category=getattr(args, "category", None),
        schema_file=getattr(args, "schema", None),
        validator=getattr(args, "validator", None),
    )


def _run_items(settings: CheckSettings) -> int:
    from shroom_schema_check.invoker import check_items

    return _status_from_returncode(check_items(settings))


def _run_settings(args: argparse.Namespace) -> int:
    from shroom_schema_check.validation import check_settings

    options = SettingsCheckOptions(
        root=args.root,
        settings_path=args.settings,
        shared_schema=args.shared_schema,
        filter=args.filter,
    )
    return check_settings(options)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "settings":
            return _run_settings(args)
        try:
            settings = _item_settings(args)
        except ValueError as exc:
            print(f"Invalid configuration: {exc}", file=sys.stderr)
            return EXIT_CONFIG_ERROR
        return _run_items(settings)
    except ValidatorNotFound as exc:
        print(f"{exc}. Install it (e.g. python -m pip install check-jsonschema) or set SHROOM_SCHEMA_VALIDATOR.", file=sys.stderr)
        return EXIT_VALIDATOR_NOT_FOUND
    except SettingsError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
