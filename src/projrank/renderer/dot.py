"""Serialize the project graph to Graphviz DOT and render it."""

from __future__ import annotations

import logging
import re
import subprocess
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from projrank.errors import NodeNameCollisionError, RenderingError
from projrank.registry import ProjectRegistry
from projrank.renderer.console import group_by_rank

logger = logging.getLogger(__name__)

_ILLEGAL_ID_CHARS = re.compile(r"[^A-Za-z0-9_]")

# reserved in any letter case, so never usable as bare ids
_DOT_KEYWORDS = {"node", "edge", "graph", "digraph", "subgraph", "strict"}


def sanitize_node_id(name: str) -> str:
    """Turn a project name into a bare DOT identifier (``A.B`` -> ``A_B``)."""
    node_id = _ILLEGAL_ID_CHARS.sub("_", name)
    if not node_id or node_id[0].isdigit() or node_id.lower() in _DOT_KEYWORDS:
        node_id = "_" + node_id
    return node_id


def build_node_ids(names: Iterable[str]) -> dict[str, str]:
    """Map each name to its node id, refusing ids shared by distinct names."""
    node_ids: dict[str, str] = {}
    by_id: dict[str, list[str]] = defaultdict(list)
    for name in sorted(set(names)):
        node_id = sanitize_node_id(name)
        node_ids[name] = node_id
        by_id[node_id].append(name)

    collisions = {k: v for k, v in by_id.items() if len(v) > 1}
    if collisions:
        raise NodeNameCollisionError(collisions)
    return node_ids


def to_dot(registry: ProjectRegistry, ranked: bool = True) -> str:
    """Return a ``digraph`` with one edge per project reference.

    With *ranked*, projects sharing a rank are pinned to the same layer with
    ``rank=same``, listed from the highest rank down to 0.
    """
    projects = registry.sorted_projects()
    referenced = {r for p in projects for r in p.project_refs}
    node_ids = build_node_ids([p.name for p in projects] + sorted(referenced))

    lines = ["digraph G {"]
    for project in projects:
        for ref in project.project_refs:
            lines.append(f"    {node_ids[project.name]} -> {node_ids[ref]};")
    for project in projects:
        # isolated projects have no edge statement to introduce them
        if not project.project_refs and project.name not in referenced:
            lines.append(f"    {node_ids[project.name]};")

    if ranked:
        for _rank, group in group_by_rank(registry, descending=True):
            members = " ".join(f"{node_ids[p.name]};" for p in group)
            lines.append(f"    {{ rank=same; {members} }}")

    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(text: str, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    logger.info("Wrote %s", output_path)
    return output_path


def render_graph(
    dot_path: Path, fmt: str = "pdf", renderer: str = "dot"
) -> Path:
    """Run the Graphviz layout tool on *dot_path* and return the output file."""
    out_path = dot_path.with_suffix(f".{fmt}")
    cmd = [renderer, f"-T{fmt}", dot_path.name, "-o", out_path.name]
    logger.info("%s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(dot_path.parent),
        )
    except FileNotFoundError as e:
        raise RenderingError(f"could not run {renderer}: {e}") from e

    if result.stdout:
        logger.debug("%s", result.stdout.rstrip())
    if result.stderr:
        logger.debug("%s", result.stderr.rstrip())

    if result.returncode != 0:
        raise RenderingError(
            f"{' '.join(cmd)} returned exit code {result.returncode}",
            returncode=result.returncode,
            stderr=result.stderr or "",
        )
    return out_path
