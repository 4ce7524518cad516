from __future__ import annotations

import logging
import re
from pathlib import Path

from .config import validate_category

logger = logging.getLogger(__name__)


def item_pattern(category: str) -> re.Pattern[str]:
    """Regex for `items/<category>/<digits>.img/img.json`, relative to the scan root."""

    validate_category(category)
    return re.compile(rf"items/{re.escape(category)}/[0-9]+\.img/img\.json")


def select_files(root: str | Path, category: str) -> list[str]:
    """
    Return the item dumps under `root` for one category.

    Paths are POSIX-style, relative to `root`, and sorted. A missing root is
    treated as an empty tree.
    """

    pattern = item_pattern(category)
    root_path = Path(root)
    if not root_path.is_dir():
        logger.debug("Scan root %s is not a directory; nothing to select", root_path)
        return []

    selected: list[str] = []
    for path in root_path.glob(f"items/{category}/*.img/img.json"):
        rel = path.relative_to(root_path).as_posix()
        if not pattern.fullmatch(rel):
            continue
        if not path.is_file():
            continue
        selected.append(rel)

    selected.sort()
    logger.debug("Selected %d file(s) under %s for category %s", len(selected), root_path, category)
    return selected
