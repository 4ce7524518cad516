from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import SettingsError

SCHEMAS_KEY = "json.schemas"


@dataclass(frozen=True, slots=True)
class SchemaMapping:
    file_match: tuple[str, ...]
    url: str

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "SchemaMapping":
        file_match = data.get("fileMatch")
        url = data.get("url")
        if not isinstance(file_match, list) or not file_match or not all(isinstance(p, str) for p in file_match):
            raise SettingsError(f"Schema mapping needs a non-empty 'fileMatch' list of strings: {data!r}")
        if not isinstance(url, str) or not url:
            raise SettingsError(f"Schema mapping needs a 'url' string: {data!r}")
        return SchemaMapping(file_match=tuple(file_match), url=url)

    @property
    def primary_glob(self) -> str:
        return self.file_match[0]


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as file:
        return json.load(file)


def load_mappings(settings_path: Path) -> list[SchemaMapping]:
    """Read the `json.schemas` entries of an editor settings file."""

    try:
        settings = load_json(settings_path)
    except FileNotFoundError as exc:
        raise SettingsError(f"Settings file not found: {settings_path}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SettingsError(f"Settings file is not valid JSON: {settings_path}: {exc}") from exc

    if not isinstance(settings, dict):
        raise SettingsError(f"Settings file must hold a JSON object: {settings_path}")
    entries = settings.get(SCHEMAS_KEY)
    if entries is None:
        raise SettingsError(f"Missing {SCHEMAS_KEY!r} in {settings_path}")
    if not isinstance(entries, list):
        raise SettingsError(f"{SCHEMAS_KEY!r} must be a list in {settings_path}")

    mappings: list[SchemaMapping] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise SettingsError(f"Schema mapping must be an object: {entry!r}")
        mappings.append(SchemaMapping.from_dict(entry))
    return mappings
