"""Run configuration and ``.projrank.toml`` loading."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path

from projrank.discovery import DEFAULT_EXTENSIONS
from projrank.errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".projrank.toml"
DEFAULT_DOT_FILENAME = "ProjectRefs.gv"

# Keys accepted in the [projrank] table, with the type each must have
_FILE_KEYS = {
    "exclude": list,
    "extensions": list,
    "ranked": bool,
    "render": bool,
    "render_format": str,
    "renderer": str,
}


@dataclass(frozen=True)
class AnalyzerConfig:
    """Everything a run needs, passed explicitly to each step."""

    path: Path
    exclude: tuple[str, ...] = ()
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    dot: bool = False
    ranked: bool = True
    render: bool = True
    render_format: str = "pdf"
    renderer: str = "dot"
    verbose: bool = False
    output_dir: Path = field(default_factory=Path.cwd)
    dot_filename: str = DEFAULT_DOT_FILENAME

    @property
    def dot_path(self) -> Path:
        return self.output_dir / self.dot_filename


def read_config_file(path: Path) -> dict:
    """Return the ``[projrank]`` table of *path*, validated."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"could not read {path}: {e}") from e

    table = data.get("projrank", {})
    if not isinstance(table, dict):
        raise ConfigError(f"{path}: [projrank] must be a table")

    for key, value in table.items():
        expected = _FILE_KEYS.get(key)
        if expected is None:
            raise ConfigError(f"{path}: unknown key {key!r}")
        if not isinstance(value, expected):
            raise ConfigError(
                f"{path}: {key!r} must be of type {expected.__name__}"
            )
        if expected is list and not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{path}: {key!r} must be a list of strings")
    return table


def find_config_file(root: Path) -> Path | None:
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(
    config: AnalyzerConfig, config_file: Path | None = None
) -> AnalyzerConfig:
    """Merge file settings under *config* and return the combined config.

    An explicit *config_file* must be valid.  Otherwise ``.projrank.toml``
    in the scanned root is used when present, and ignored with a warning if
    it cannot be read.  Values already set on *config* win over the file,
    except ``exclude``, where both lists apply.
    """
    if config_file is not None:
        table = read_config_file(config_file)
    else:
        implicit = find_config_file(config.path)
        if implicit is None:
            return config
        try:
            table = read_config_file(implicit)
        except ConfigError as e:
            logger.warning("Ignoring %s", e)
            return config
        config_file = implicit

    logger.debug("Loaded settings from %s: %s", config_file, sorted(table))
    defaults = AnalyzerConfig(path=config.path)
    changes: dict = {}
    if "exclude" in table:
        merged = [*table["exclude"], *config.exclude]
        changes["exclude"] = tuple(dict.fromkeys(merged))
    for key in ("extensions", "ranked", "render", "render_format", "renderer"):
        # a value still at its default was not given on the command line
        if key in table and getattr(config, key) == getattr(defaults, key):
            value = table[key]
            changes[key] = tuple(value) if isinstance(value, list) else value
    return replace(config, **changes)
