"""Recursive discovery of project manifests."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from projrank.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".csproj",)

_SKIP = {
    ".git",
    ".hg",
    ".svn",
    ".vs",
    "bin",
    "obj",
    "node_modules",
}


def find_manifests(
    root: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> Iterator[Path]:
    """Yield manifest files under *root*, depth first.

    Files in a directory come before its subdirectories, both sorted by
    name, so the discovery order is stable across runs and platforms.
    """
    if not root.is_dir():
        raise ConfigError(f"not a directory: {root}")

    suffixes = {_normalize_extension(e) for e in extensions}
    yield from _walk(root, suffixes)


def _walk(directory: Path, suffixes: set[str]) -> Iterator[Path]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning("Could not list %s: %s", directory, e)
        return

    subdirs: list[Path] = []
    for entry in entries:
        if entry.is_dir():
            if entry.name not in _SKIP:
                subdirs.append(entry)
        elif entry.suffix.lower() in suffixes:
            logger.debug("Found manifest %s", entry)
            yield entry

    for subdir in subdirs:
        yield from _walk(subdir, suffixes)


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    if not ext.startswith("."):
        ext = "." + ext
    return ext
