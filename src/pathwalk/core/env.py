"""Runtime environment helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

_USER_ENV_LOADED = False

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def load_user_env() -> None:
    """Load user-level pathwalk env files without overriding existing vars."""
    global _USER_ENV_LOADED
    if _USER_ENV_LOADED:
        return

    for env_file in _candidate_env_files():
        _load_env_file(env_file)

    _USER_ENV_LOADED = True


def configure_logging(verbose: bool = False) -> None:
    """Send pathwalk logs to stderr.

    ``--verbose`` wins; otherwise PATHWALK_LOG_LEVEL picks the level and
    WARNING is the default.
    """
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get("PATHWALK_LOG_LEVEL", "").strip().upper()
        level = logging.getLevelName(name) if name else logging.WARNING
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("pathwalk").setLevel(level)


def _candidate_env_files() -> list[Path]:
    files: list[Path] = []
    env_override = os.environ.get("PATHWALK_ENV_FILE", "").strip()
    if env_override:
        files.append(Path(env_override).expanduser())

    home_override = os.environ.get("PATHWALK_HOME", "").strip()
    if home_override:
        files.append(Path(home_override).expanduser() / ".env")

    home = Path.home()
    files.extend(
        [
            home / ".config" / "pathwalk" / "env",
            home / ".config" / "pathwalk" / ".env",
        ]
    )
    return files


def _load_env_file(path: Path) -> None:
    if not path.is_file():
        return
    for raw_line in path.read_text().splitlines():
        parsed = _parse_line(raw_line)
        if parsed and parsed[0] not in os.environ:
            os.environ[parsed[0]] = parsed[1]


def _parse_line(raw: str) -> tuple[str, str] | None:
    """Parse ``[export ]KEY=VALUE``; comments and malformed lines give None."""
    line = raw.strip()
    if line.startswith("export "):
        line = line.removeprefix("export ").strip()
    if not line or line.startswith("#") or "=" not in line:
        return None

    key, _, value = line.partition("=")
    key = key.strip()
    if not key:
        return None

    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return key, value
