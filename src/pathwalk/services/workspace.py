"""Workspace boundary checks for paths reported by language servers.

A language server may hand back file paths with different casing, through
symlinks, or outside the folder it was started in.  :class:`Workspace`
validates such paths against the physical workspace root and finds the
project root a server should be started in for a given file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import combinations
from pathlib import Path

from pathwalk.core.filesystem import StrPath, contains, normalize, overlaps, up

logger = logging.getLogger(__name__)


class OutsideWorkspaceError(ValueError):
    """Raised when a path resolves outside the workspace root."""

    def __init__(self, path: StrPath, root: Path):
        super().__init__(f"Path '{path}' resolves outside the workspace '{root}'.")
        self.path = Path(path)
        self.root = root


@dataclass(frozen=True)
class Workspace:
    """A workspace folder a language server was started in."""

    root: Path

    @classmethod
    def open(cls, root: StrPath) -> Workspace:
        return cls(root=normalize(os.path.abspath(root)))

    def is_inside(self, path: StrPath) -> bool:
        return contains(self.root, normalize(path))

    def check(self, path: StrPath) -> Path:
        """Return the normalised *path*, or raise OutsideWorkspaceError."""
        candidate = normalize(path)
        if not contains(self.root, candidate):
            logger.warning("Rejected path outside workspace %s: %s", self.root, path)
            raise OutsideWorkspaceError(path, self.root)
        return candidate

    def filter_inside(self, paths: Iterable[StrPath]) -> list[Path]:
        return [normalize(p) for p in paths if self.is_inside(p)]

    def nearest_root(self, file: StrPath, markers: Iterable[str]) -> Path | None:
        """Nearest directory holding a marker, searching from *file* up to the root.

        Returns None if *file* is outside the workspace or no level between
        it and the workspace root has a marker.
        """
        if not self.is_inside(file):
            return None
        # Ascend in root coordinates so the walk always ends at the root,
        # even when *file* was reached through a symlink into the workspace.
        physical_dir = os.path.realpath(os.path.dirname(os.path.abspath(file)))
        rel = os.path.relpath(physical_dir, os.path.realpath(self.root))
        start = self.root if rel == os.curdir else self.root / rel
        hit = next(up(list(markers), start, stop=self.root), None)
        if hit is None or not self.is_inside(hit.parent):
            return None
        return hit.parent


def nested_roots(roots: Iterable[StrPath]) -> list[tuple[Path, Path]]:
    """Pairs of workspace roots where one lexically sits inside the other."""
    unique = list(dict.fromkeys(Path(os.path.abspath(r)) for r in roots))
    return [(a, b) for a, b in combinations(unique, 2) if overlaps(a, b)]
