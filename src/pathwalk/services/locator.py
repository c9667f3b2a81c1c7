"""Config-file locator — discover project markers and layered config files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from pathwalk.core import paths
from pathwalk.core.filesystem import StrPath, ascend, find_up, glob_up, up
from pathwalk.core.models import ConfigLayer, PathwalkConfig
from pathwalk.repo import config

logger = logging.getLogger(__name__)


def nearest(
    targets: str | Iterable[str],
    start: StrPath,
    stop: StrPath | None = None,
) -> Path | None:
    """Return the first match of any of *targets* walking up, or None.

    The walk stops at the first hit; higher levels are never touched.
    """
    return next(up(targets, start, stop), None)


def find_all(target: str, start: StrPath, stop: StrPath | None = None) -> list[Path]:
    """Every *target* from *start* upward, nearest first."""
    return find_up(target, start, stop)


def layers(target: str, start: StrPath, stop: StrPath | None = None) -> list[ConfigLayer]:
    """Config files named *target*, outermost first.

    Applying layers in order lets files nearer to *start* override the ones
    above them.
    """
    origin = os.path.abspath(start)
    found: list[ConfigLayer] = []
    for hit in find_up(target, start, stop):
        rel = os.path.relpath(str(hit.parent), origin)
        depth = 0 if rel == os.curdir else len(Path(rel).parts)
        found.append(ConfigLayer(path=hit, depth=depth))
    return list(reversed(found))


def load_nearest_config(
    start: StrPath,
    stop: StrPath | None = None,
) -> tuple[Path, PathwalkConfig] | None:
    """Locate and parse the nearest pathwalk.toml.

    Raises ValueError if the nearest file exists but is not valid TOML.
    """
    hit = nearest(paths.CONFIG_FILE, start, stop)
    if hit is None:
        logger.debug("No %s above %s", paths.CONFIG_FILE, start)
        return None
    logger.debug("Using config %s", hit)
    return hit, config.load(hit)


def collect(pattern: str, start: StrPath, stop: StrPath | None = None) -> dict[Path, list[Path]]:
    """Group glob-upward matches by the level that produced them.

    Levels keep ascension order (nearest first); levels without matches are
    left out.
    """
    grouped: dict[Path, list[Path]] = {}
    for level in ascend(start, stop):
        matches = glob_up(pattern, level, stop=level)
        if matches:
            grouped[level] = matches
    return grouped
