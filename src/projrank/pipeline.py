"""Orchestrator: discover → register → rank → report → render."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from projrank.analysis import assign_ranks
from projrank.config import AnalyzerConfig
from projrank.discovery import find_manifests
from projrank.extractors.base import ManifestLoader
from projrank.extractors.msbuild import MSBuildManifestLoader
from projrank.naming import derive_project_name, is_excluded
from projrank.registry import ProjectRegistry
from projrank.renderer.console import ReportStats, compute_stats, print_report
from projrank.renderer.dot import render_graph, to_dot, write_dot

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """What a run produced."""

    registry: ProjectRegistry
    ranks: dict[str, int]
    stats: ReportStats
    dot_path: Path | None = None
    rendered_path: Path | None = None


def build_registry(
    manifests: list[Path],
    exclude: tuple[str, ...] = (),
    loaders: list[ManifestLoader] | None = None,
) -> ProjectRegistry:
    """Load every non-excluded manifest into a new registry."""
    loaders = loaders if loaders is not None else [MSBuildManifestLoader()]
    registry = ProjectRegistry()
    for manifest in manifests:
        name = derive_project_name(manifest)
        if is_excluded(name, exclude):
            logger.debug("Excluding project %s", name)
            continue
        loader = _pick_loader(loaders, manifest)
        if loader is None:
            logger.warning("No loader for %s, skipping", manifest)
            continue
        refs = loader.load(manifest, exclude)
        registry.register(name, refs.project_refs, refs.package_refs, path=manifest)
    return registry


def _pick_loader(loaders: list[ManifestLoader], manifest: Path) -> ManifestLoader | None:
    for loader in loaders:
        if loader.can_handle(manifest):
            return loader
    return None


def run(config: AnalyzerConfig, stream: TextIO | None = None) -> AnalysisResult:
    """Run the full analysis described by *config*.

    The report is printed before the graph is rendered, so a rendering
    failure leaves the statistics on screen.
    """
    stream = stream or sys.stdout
    root = config.path.resolve()

    manifests = list(find_manifests(root, config.extensions))
    logger.debug("Discovered %d manifests under %s", len(manifests), root)

    registry = build_registry(manifests, config.exclude)
    ranks = assign_ranks(registry)

    stats = compute_stats(registry, discovered=len(manifests))
    print_report(registry, stats, stream, verbose=config.verbose)

    result = AnalysisResult(registry=registry, ranks=ranks, stats=stats)
    if config.dot:
        text = to_dot(registry, ranked=config.ranked)
        result.dot_path = write_dot(text, config.dot_path)
        if config.render:
            result.rendered_path = render_graph(
                result.dot_path, config.render_format, config.renderer
            )
            logger.info("Generated %s", result.rendered_path)
    return result
