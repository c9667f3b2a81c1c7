"""Data shapes for pathwalk configuration and locator results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pathwalk.core.paths import DEFAULT_MARKERS


# ── Config layer ────────────────────────────────────────────────────


@dataclass
class ProjectConfig:
    """Mirrors the [project] table in pathwalk.toml."""
    name: str


@dataclass
class WalkConfig:
    """Mirrors the [walk] table — how project roots are discovered."""

    markers: list[str] = field(default_factory=lambda: list(DEFAULT_MARKERS))
    stop: str = ""  # relative to the directory holding pathwalk.toml

    def stop_path(self, base: Path) -> Path | None:
        """Return the stop boundary anchored at *base*, or None when unset."""
        if not self.stop:
            return None
        return base / Path(self.stop).expanduser()


@dataclass
class PathwalkConfig:
    """Root configuration object for pathwalk.toml."""

    project: ProjectConfig
    walk: WalkConfig = field(default_factory=WalkConfig)


# ── Locator layer ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ConfigLayer:
    """One config file found during an upward search.

    ``depth`` counts levels above the start directory; 0 is the start itself.
    """

    path: Path
    depth: int
