"""Repository for pathwalk.toml read/write."""

from __future__ import annotations

from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

from pathwalk.core.models import PathwalkConfig, ProjectConfig, WalkConfig


def create_default(name: str) -> PathwalkConfig:
    """Factory for a fresh project config."""
    return PathwalkConfig(project=ProjectConfig(name=name))


# ── Serialization ───────────────────────────────────────────────────


def dump(cfg: PathwalkConfig) -> str:
    """Serialize a PathwalkConfig to a TOML string."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("pathwalk configuration"))
    doc.add(tomlkit.nl())

    proj = tomlkit.table()
    proj.add("name", cfg.project.name)
    doc.add("project", proj)

    walk = tomlkit.table()
    walk.add("markers", list(cfg.walk.markers))
    if cfg.walk.stop:
        walk.add("stop", cfg.walk.stop)
    else:
        walk.add(tomlkit.comment('stop = ".."  # optional boundary, relative to this file'))
    doc.add("walk", walk)

    return tomlkit.dumps(doc)


def loads(text: str) -> PathwalkConfig:
    """Deserialize pathwalk.toml content into a PathwalkConfig.

    Raises ValueError when the document is not valid TOML.
    """
    try:
        raw = tomlkit.loads(text)
    except ParseError as exc:
        raise ValueError(f"Invalid pathwalk.toml: {exc}") from exc

    proj_raw = raw.get("project", {})
    walk_raw = raw.get("walk", {})

    defaults = WalkConfig()
    markers = [str(m) for m in walk_raw.get("markers", defaults.markers) if str(m).strip()]

    return PathwalkConfig(
        project=ProjectConfig(name=str(proj_raw.get("name", ""))),
        walk=WalkConfig(
            markers=markers or defaults.markers,
            stop=str(walk_raw.get("stop", "")).strip(),
        ),
    )


def load(path: Path) -> PathwalkConfig:
    """Read and parse a pathwalk.toml file."""
    return loads(path.read_text())


def save(cfg: PathwalkConfig, path: Path) -> None:
    """Write config to disk."""
    path.write_text(dump(cfg))
