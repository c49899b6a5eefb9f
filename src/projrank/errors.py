"""Exception hierarchy for projrank."""

from __future__ import annotations


class ProjrankError(Exception):
    """Base class for all errors reported by projrank."""


class ConfigError(ProjrankError):
    """Invalid configuration or input path."""


class ManifestParseError(ProjrankError):
    """A project manifest could not be read or parsed."""


class DuplicateProjectError(ProjrankError):
    """Two manifests resolve to the same project name."""

    def __init__(self, name: str, existing: str | None = None, new: str | None = None):
        self.name = name
        self.existing = existing
        self.new = new
        msg = f"duplicate project name {name!r}"
        if existing or new:
            msg += f" ({existing or '?'} and {new or '?'})"
        super().__init__(msg)


class UnknownProjectError(ProjrankError, KeyError):
    """A lookup by name found no registered project."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown project {self.name!r}"


class CycleOrMissingReferenceError(ProjrankError):
    """Rank assignment stopped making progress.

    Raised when a full sweep ranks no new project, which happens when the
    reference graph has a cycle or a reference points at a project that is
    not registered (never discovered, or excluded).
    """

    def __init__(
        self,
        unranked: list[str],
        missing: dict[str, list[str]] | None = None,
        cycles: list[list[str]] | None = None,
    ):
        self.unranked = sorted(unranked)
        self.missing = missing or {}
        self.cycles = cycles or []
        parts = [
            f"cannot rank {len(self.unranked)} project(s): "
            + ", ".join(self.unranked)
        ]
        for name, targets in sorted(self.missing.items()):
            parts.append(f"{name} references unknown project(s) {', '.join(targets)}")
        for cycle in self.cycles:
            parts.append("reference cycle among " + ", ".join(cycle))
        super().__init__("; ".join(parts))


class NodeNameCollisionError(ProjrankError):
    """Distinct project names sanitize to the same graph node id."""

    def __init__(self, collisions: dict[str, list[str]]):
        self.collisions = collisions
        detail = "; ".join(
            f"{node_id}: {', '.join(names)}"
            for node_id, names in sorted(collisions.items())
        )
        super().__init__(f"project names collide as graph node ids ({detail})")


class RenderingError(ProjrankError):
    """The external graph layout tool failed."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
