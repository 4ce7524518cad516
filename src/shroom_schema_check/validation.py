from __future__ import annotations

import glob
import json
import logging
import sys
import warnings
from pathlib import Path
from typing import Any, TextIO

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError, ValidationError

from .config import SettingsCheckOptions
from .errors import SettingsError
from .mappings import SchemaMapping, load_json, load_mappings

with warnings.catch_warnings():
    warnings.simplefilter("ignore", DeprecationWarning)
    from jsonschema import RefResolver

logger = logging.getLogger(__name__)


class SharedSchemaResolver(RefResolver):
    """Resolves every reference that leaves the current document to one shared schema."""

    def __init__(self, base_uri: str, referrer: dict[str, Any], shared: Any) -> None:
        super().__init__(base_uri=base_uri, referrer=referrer)
        self._shared = shared

    def resolve_remote(self, uri: str) -> Any:
        logger.debug("Resolving %s to the shared schema", uri)
        return self._shared


def _instance_path(error: ValidationError) -> str:
    """Render where in the instance an error sits, e.g. `$.info.tags[1]`."""

    return "$" + "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in error.absolute_path)


class SchemaValidator:
    def __init__(self, schema_path: Path, *, shared: Any) -> None:
        try:
            schema = load_json(schema_path)
        except FileNotFoundError as exc:
            raise SettingsError(f"Schema not found: {schema_path}") from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SettingsError(f"Schema is not valid JSON: {schema_path}: {exc}") from exc

        try:
            Draft7Validator.check_schema(schema)
        except SchemaError as exc:
            raise SettingsError(f"Failed to compile schema {schema_path}: {exc.message}") from exc

        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DeprecationWarning)
            resolver = SharedSchemaResolver(schema_path.resolve().as_uri(), schema, shared)
            self._validator = Draft7Validator(schema, resolver=resolver)
        self.schema_path = schema_path

    def validate(self, instance: Any) -> list[str]:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DeprecationWarning)
            errors = sorted(
                self._validator.iter_errors(instance),
                key=lambda e: [str(p) for p in e.absolute_path],
            )
        return [f"{_instance_path(e)}: {e.message}" for e in errors]

    def validate_file(self, path: Path) -> list[str]:
        try:
            instance = load_json(path)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return [f"invalid JSON: {exc}"]
        except OSError as exc:
            return [f"unreadable: {exc}"]
        return self.validate(instance)


def match_files(root: Path, pattern: str) -> list[Path]:
    matches = glob.glob(pattern, root_dir=root, recursive=True)
    return sorted(root / rel for rel in matches if (root / rel).is_file())


def _display_path(root: Path, path: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _load_shared_schema(path: Path) -> Any:
    try:
        return load_json(path)
    except FileNotFoundError as exc:
        raise SettingsError(f"Shared schema not found: {path}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SettingsError(f"Shared schema is not valid JSON: {path}: {exc}") from exc


def _selected(mappings: list[SchemaMapping], name_filter: str | None) -> list[SchemaMapping]:
    if not name_filter:
        return mappings
    return [m for m in mappings if name_filter in m.url]


def check_settings(options: SettingsCheckOptions, out: TextIO | None = None) -> int:
    """
    Validate every file covered by the editor schema mappings.

    Returns 1 when any file failed validation, 0 otherwise.
    """

    out = sys.stdout if out is None else out
    root = Path(options.root)
    mappings = load_mappings(root / options.settings_path)
    shared = _load_shared_schema(root / options.shared_schema)

    failed_files = 0
    checked_files = 0
    for mapping in _selected(mappings, options.filter):
        out.write(f"Checking {mapping.url}\n")
        validator = SchemaValidator(root / mapping.url, shared=shared)
        for path in match_files(root, mapping.primary_glob):
            checked_files += 1
            errors = validator.validate_file(path)
            if not errors:
                continue
            failed_files += 1
            rel = _display_path(root, path)
            for message in errors:
                out.write(f'"{rel}" - {message}\n')

    logger.info("Checked %d file(s), %d failed", checked_files, failed_files)
    return 1 if failed_files else 0
