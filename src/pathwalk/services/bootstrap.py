"""Bootstrap service — implements `pathwalk init`."""

from __future__ import annotations

from pathlib import Path

from pathwalk.core import paths
from pathwalk.repo import config


def init_workspace(root: Path, name: str | None = None) -> Path:
    """Write a default pathwalk.toml into *root*.

    Returns the config path on success.
    Raises FileExistsError if one is already there.
    """
    target = paths.config_path(root)
    if target.exists():
        raise FileExistsError(f"Project already initialised: {target}")

    config.save(config.create_default(name or root.name), target)
    return target
