from __future__ import annotations

__all__ = [
    "__version__",
    "CheckSettings",
    "SettingsCheckOptions",
    "SchemaCheckError",
    "SettingsError",
    "ValidatorNotFound",
    "build_command",
    "check_items",
    "check_settings",
    "select_files",
]

__version__ = "0.1.0"

from .config import CheckSettings, SettingsCheckOptions  # noqa: E402
from .errors import SchemaCheckError, SettingsError, ValidatorNotFound  # noqa: E402
from .invoker import build_command, check_items  # noqa: E402
from .selector import select_files  # noqa: E402
from .validation import check_settings  # noqa: E402
