"""Loader protocol that every manifest format conforms to."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from projrank.model import ManifestRefs


class ManifestLoader(Protocol):
    """Protocol for project manifest reference loaders."""

    def can_handle(self, manifest: Path) -> bool:
        """Return True if this loader understands the given manifest."""
        ...

    def load(self, manifest: Path, exclude: Iterable[str] = ()) -> ManifestRefs:
        """Return the project and package references declared by *manifest*.

        Project references whose name matches *exclude* are dropped.
        """
        ...
