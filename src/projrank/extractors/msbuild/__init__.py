"""MSBuild project file (.csproj and friends) support."""

from __future__ import annotations

from pathlib import Path

from projrank.extractors.msbuild.project_refs import MSBuildManifestLoader

__all__ = ["MSBUILD_EXTENSIONS", "MSBuildManifestLoader", "is_msbuild_project"]

MSBUILD_EXTENSIONS = (".csproj", ".vbproj", ".fsproj")


def is_msbuild_project(manifest: Path) -> bool:
    """Return True if *manifest* looks like an MSBuild project file."""
    return manifest.suffix.lower() in MSBUILD_EXTENSIONS
