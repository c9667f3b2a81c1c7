"""Path constants and root-resolution logic."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from pathwalk.core.filesystem import StrPath, up

CONFIG_FILE = "pathwalk.toml"
DEFAULT_MARKERS = (".git", "pyproject.toml", "package.json", CONFIG_FILE)


def resolve_root(
    start: StrPath | None = None,
    markers: Iterable[str] = DEFAULT_MARKERS,
    stop: StrPath | None = None,
) -> Path:
    """Walk up from *start* to the nearest directory holding a marker, else *start*."""
    start = Path(os.path.abspath(start or Path.cwd()))
    hit = next(up(markers, start, stop), None)
    return hit.parent if hit else start


def config_path(root: Path) -> Path:
    return root / CONFIG_FILE
