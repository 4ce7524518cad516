from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from .config import CheckSettings
from .errors import ValidatorNotFound
from .selector import select_files

logger = logging.getLogger(__name__)


def build_command(validator: str, schema_file: str, files: Sequence[str]) -> list[str]:
    return [validator, "--schemafile", schema_file, *files]


def resolve_executable(validator: str) -> str:
    expanded = os.path.expanduser(validator)
    if os.sep in expanded or (os.altsep and os.altsep in expanded):
        if not os.path.isfile(expanded):
            raise ValidatorNotFound(validator, reason="no such file")
        if not os.access(expanded, os.X_OK):
            raise ValidatorNotFound(validator, reason="not executable")
        return os.path.abspath(expanded)

    found = shutil.which(expanded)
    if found is None:
        raise ValidatorNotFound(validator, reason="not on PATH")
    return found


def run_validator(settings: CheckSettings, files: Sequence[str]) -> int:
    """
    Run the validator over `files` and return its exit status as-is.

    `files` are relative to the scan root. They are handed over joined onto the
    root, so they resolve from the invoking directory, like the schema file
    and the validator path.
    """

    executable = resolve_executable(settings.validator)
    targets = [(Path(settings.root) / rel).as_posix() for rel in files]
    command = build_command(executable, settings.schema_file, targets)
    logger.debug("Running %s with %d file(s) under %s", executable, len(targets), settings.root)
    try:
        completed = subprocess.run(command, check=False)
    except OSError as exc:
        raise ValidatorNotFound(settings.validator, reason=str(exc)) from exc
    logger.debug("%s exited with status %d", executable, completed.returncode)
    return completed.returncode


def check_items(settings: CheckSettings) -> int:
    files = select_files(settings.root, settings.category)
    if not files:
        # Nothing to check: the validator is not started.
        logger.warning(
            "No files matched items/%s/<id>.img/img.json under %s; skipping validation",
            settings.category,
            settings.root,
        )
        return 0
    return run_validator(settings, files)
