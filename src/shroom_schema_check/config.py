from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from typing import Mapping

DEFAULT_ROOT = "."
DEFAULT_CATEGORY = "Pet"
DEFAULT_SCHEMA_FILE = "schemas/pet_item.schema.json"
DEFAULT_VALIDATOR = "check-jsonschema"

DEFAULT_SETTINGS_PATH = ".vscode/settings.json"
DEFAULT_SHARED_SCHEMA = "schemas/shroom.schema.json"

_CATEGORY_RE = re.compile(r"[A-Za-z0-9_-]+")


def _env_value(env: Mapping[str, str], key: str, default: str) -> str:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def validate_category(category: str) -> str:
    if not _CATEGORY_RE.fullmatch(category):
        raise ValueError(f"Invalid item category (expected letters, digits, '_' or '-'): {category!r}")
    return category


@dataclass(frozen=True)
class CheckSettings:
    """Fixed inputs of the item check: where to look, what to match, what to run."""

    root: str = DEFAULT_ROOT
    category: str = DEFAULT_CATEGORY
    schema_file: str = DEFAULT_SCHEMA_FILE
    validator: str = DEFAULT_VALIDATOR

    def __post_init__(self) -> None:
        validate_category(self.category)
        if not self.validator.strip():
            raise ValueError("Validator executable must not be empty")
        if not self.schema_file.strip():
            raise ValueError("Schema file must not be empty")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "CheckSettings":
        env = os.environ if env is None else env
        return cls(
            root=_env_value(env, "SHROOM_SCHEMA_ROOT", DEFAULT_ROOT),
            category=_env_value(env, "SHROOM_SCHEMA_CATEGORY", DEFAULT_CATEGORY),
            schema_file=_env_value(env, "SHROOM_SCHEMA_FILE", DEFAULT_SCHEMA_FILE),
            validator=_env_value(env, "SHROOM_SCHEMA_VALIDATOR", DEFAULT_VALIDATOR),
        )

    def with_overrides(self, **overrides: str | None) -> "CheckSettings":
        values = {key: value for key, value in overrides.items() if value is not None}
        if not values:
            return self
        return replace(self, **values)


@dataclass(frozen=True)
class SettingsCheckOptions:
    root: str = DEFAULT_ROOT
    settings_path: str = DEFAULT_SETTINGS_PATH
    shared_schema: str = DEFAULT_SHARED_SCHEMA
    filter: str | None = None
