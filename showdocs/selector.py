"""Input tree walking and page classification."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterator

from .logging import get_logger
from .models import DocPage, PageKind

SERIALIZED_FORM_FILENAME = "serialized-form.html"

# Library assets bundled with generated docs; they never carry descriptions.
_EXCLUDED_DIRS = {
    "jquery",
    "resources",
}

_PAGE_PATTERN = re.compile(r"(module-summary|package-summary|[A-Z].*|serialized-form)\.html")

logger = get_logger("selector")


def classify(filename: str) -> PageKind:
    """Return the page kind for a file name, independent of its location."""
    if not _PAGE_PATTERN.fullmatch(filename):
        return PageKind.IGNORED
    if filename == SERIALIZED_FORM_FILENAME:
        return PageKind.SERIALIZED_FORM
    return PageKind.API


def is_excluded_dir(name: str) -> bool:
    return name in _EXCLUDED_DIRS


def _iter_files(root: Path) -> Iterator[Path]:
    logger.debug("dir: %s", root)
    try:
        entries = sorted(os.scandir(root), key=lambda entry: entry.name)
    except OSError as exc:
        logger.error("Cannot list directory %s: %s", root, exc)
        return
    for entry in entries:
        if entry.is_dir():
            if is_excluded_dir(entry.name):
                continue
            yield from _iter_files(Path(entry.path))
        elif entry.is_file():
            yield Path(entry.path)


class TreeSelector:
    """Walks an input tree and yields the documentation pages to convert."""

    def select(self, root: str | Path) -> Iterator[DocPage]:
        """Yield candidate pages depth-first, in sorted order within each directory."""
        root_path = Path(root).expanduser()
        if not root_path.exists():
            raise FileNotFoundError(f"Input path not found: {root}")

        if root_path.is_file():
            kind = classify(root_path.name)
            if kind is not PageKind.IGNORED:
                yield DocPage(path=root_path, relative_path=Path(root_path.name), kind=kind)
            return

        for path in _iter_files(root_path):
            kind = classify(path.name)
            if kind is PageKind.IGNORED:
                continue
            yield DocPage(path=path, relative_path=path.relative_to(root_path), kind=kind)


__all__ = ["SERIALIZED_FORM_FILENAME", "TreeSelector", "classify", "is_excluded_dir"]
