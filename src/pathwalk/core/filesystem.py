"""Symlink-aware containment checks and upward directory searches.

Every function here is best effort: filesystem errors degrade to a
conservative answer (``False`` for containment, "not found" for searches)
and are logged at DEBUG instead of being raised.

Calls block on filesystem I/O and impose no timeouts.  Callers running an
event loop should dispatch them off the loop (``asyncio.to_thread``) and
wrap them in their own timeout.
"""

from __future__ import annotations

import errno
import logging
import os
import re
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


# ── Normalisation ───────────────────────────────────────────────────


def _case_insensitive() -> bool:
    return sys.platform == "win32"


def normalize(path: StrPath) -> Path:
    """Return *path* with the casing stored on disk.

    Only case-insensitive platforms are adjusted; elsewhere, and whenever the
    lookup fails, *path* comes back unchanged.
    """
    if not _case_insensitive():
        return Path(path)
    try:
        return Path(os.path.realpath(path, strict=True))
    except (OSError, ValueError) as exc:
        logger.debug("Could not normalise %s: %s", path, exc)
        return Path(path)


# ── Overlap / containment ───────────────────────────────────────────


def _escapes(rel: str) -> bool:
    return rel == os.pardir or rel.startswith(os.pardir + os.sep)


def overlaps(a: StrPath, b: StrPath) -> bool:
    """Lexical check: is either path an ancestor of (or equal to) the other?

    No symlinks are resolved and nothing is read from disk, so this is a
    cheap pre-check, not a security boundary.  Use :func:`contains` for that.
    """
    try:
        rel_a = os.path.relpath(b, a)
        rel_b = os.path.relpath(a, b)
    except ValueError:
        # No relative path exists, e.g. different Windows drives.
        return False
    return not _escapes(rel_a) or not _escapes(rel_b)


def _absolute(path: StrPath) -> str:
    # Keep ".." segments so they are resolved physically, not folded lexically.
    raw = os.fspath(path)
    return raw if os.path.isabs(raw) else os.path.join(os.getcwd(), raw)


def _present(path: str) -> bool:
    """True if *path* exists, False if it is missing.

    Dangling links, permission errors and symlink loops raise instead.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        pass
    else:
        return True
    try:
        os.lstat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    raise FileNotFoundError(errno.ENOENT, "Dangling symlink", path)


def _physical(path: str) -> str:
    """Resolve *path* through symlinks, even if its tail does not exist yet."""
    current = path
    while not _present(current):
        parent = os.path.dirname(current)
        if parent == current:
            return path
        current = parent

    real = os.path.realpath(current, strict=True)
    if current == path:
        return real
    return os.path.join(real, os.path.relpath(path, current))


def contains(parent: StrPath, child: StrPath) -> bool:
    """Return True if *child* physically lives inside *parent*.

    Both sides are resolved through symlinks.  A *child* that does not exist
    yet is judged by its nearest existing ancestor, so a path routed through
    a symlinked directory that points elsewhere is rejected before it is
    created.  That judgement can go stale if the tree changes between this
    check and the caller's use of the path.

    Any error resolving either side returns False.
    """
    try:
        parent_str = _absolute(parent)
        real_parent = (
            os.path.realpath(parent_str, strict=True)
            if _present(parent_str)
            else parent_str
        )
        real_child = _physical(_absolute(child))
        rel = os.path.relpath(real_child, real_parent)
    except (OSError, ValueError) as exc:
        logger.debug("Containment check %s in %s failed: %s", child, parent, exc)
        return False

    return not _escapes(rel) and not os.path.isabs(rel)


# ── Upward search ───────────────────────────────────────────────────


def _same(a: str, b: str) -> bool:
    return os.path.normcase(a) == os.path.normcase(b)


def _ascend(start: StrPath, stop: StrPath | None = None) -> Iterator[str]:
    """Yield *start* and each ancestor, ending at *stop* (inclusive) or root.

    The walk is lexical; symlinks are never followed to find a parent.
    """
    current = os.path.abspath(os.fspath(start))
    boundary = os.path.abspath(os.fspath(stop)) if stop is not None else None
    while True:
        yield current
        if boundary is not None and _same(current, boundary):
            return
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def ascend(start: StrPath, stop: StrPath | None = None) -> Iterator[Path]:
    """Yield the directories an upward search visits, nearest first."""
    for directory in _ascend(start, stop):
        yield Path(directory)


def _exists(path: str) -> bool:
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except (OSError, ValueError) as exc:
        logger.debug("Skipping %s: %s", path, exc)
        return False
    return True


def find_up(target: str, start: StrPath, stop: StrPath | None = None) -> list[Path]:
    """Collect every ``<dir>/<target>`` that exists from *start* upward.

    Results are ordered nearest-first.  *stop*, when reached, is checked and
    ends the walk; otherwise the walk ends at the filesystem root.
    """
    found: list[Path] = []
    for directory in _ascend(start, stop):
        candidate = os.path.join(directory, target)
        if _exists(candidate):
            found.append(Path(candidate))
    return found


def up(
    targets: str | Iterable[str],
    start: StrPath,
    stop: StrPath | None = None,
) -> Iterator[Path]:
    """Lazily yield existing ``<dir>/<name>`` for each name in *targets*.

    Names are tested in the order given at every level before moving up.
    Nothing touches the filesystem until the caller asks for the next match,
    so breaking out early skips the rest of the walk.
    """
    names = [targets] if isinstance(targets, str) else list(targets)
    for directory in _ascend(start, stop):
        for name in names:
            candidate = os.path.join(directory, name)
            if _exists(candidate):
                yield Path(candidate)


def _translate_segment(part: str) -> str:
    out: list[str] = []
    i, n = 0, len(part)
    while i < n:
        char = part[i]
        i += 1
        if char == "*":
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        elif char == "[":
            end = i
            if end < n and part[end] in "!^":
                end += 1
            if end < n and part[end] == "]":
                end += 1
            while end < n and part[end] != "]":
                end += 1
            if end >= n:
                out.append(re.escape(char))
                continue
            body = part[i:end].replace("\\", "\\\\").replace("[", "\\[")
            i = end + 1
            if body[:1] in ("!", "^"):
                out.append(f"[^/{body[1:]}]")
            else:
                out.append(f"[{body}]")
        elif char == "{":
            end = part.find("}", i)
            if end == -1:
                out.append(re.escape(char))
                continue
            options = part[i:end].split(",")
            i = end + 1
            out.append("(?:" + "|".join(_translate_segment(o) for o in options) + ")")
        else:
            out.append(re.escape(char))
    return "".join(out)


def _compile(pattern: str) -> tuple[re.Pattern[str], int | None]:
    """Compile a glob into a regex over ``/``-separated relative paths.

    Also returns how many directories deep a match can sit, or None when a
    ``**`` segment makes the pattern unbounded.
    """
    if os.path.isabs(pattern):
        raise ValueError(f"glob pattern must be relative: {pattern!r}")
    parts = [p for p in pattern.replace(os.sep, "/").split("/") if p not in ("", os.curdir)]
    if not parts:
        raise ValueError("empty glob pattern")
    regex: list[str] = []
    for index, part in enumerate(parts):
        last = index == len(parts) - 1
        if part == "**":
            regex.append(".*" if last else "(?:[^/]+/)*")
            continue
        regex.append(_translate_segment(part))
        if not last:
            regex.append("/")
    depth = None if "**" in parts else len(parts) - 1
    return re.compile("".join(regex), re.DOTALL), depth


def _walk_error(exc: OSError) -> None:
    logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)


def _glob_level(pattern: str, directory: str) -> list[Path]:
    try:
        matcher, max_depth = _compile(pattern)
    except (ValueError, re.error) as exc:
        logger.debug("Invalid glob %r: %s", pattern, exc)
        return []

    hits: list[str] = []
    visited: set[tuple[int, int]] = set()
    try:
        for dirpath, dirnames, filenames in os.walk(
            directory, onerror=_walk_error, followlinks=True
        ):
            st = os.stat(dirpath)
            if (st.st_dev, st.st_ino) in visited:
                # Already scanned through another path, e.g. a symlink loop.
                dirnames[:] = []
                continue
            visited.add((st.st_dev, st.st_ino))

            rel_dir = os.path.relpath(dirpath, directory)
            depth = 0 if rel_dir == os.curdir else rel_dir.count(os.sep) + 1
            if max_depth is not None and depth >= max_depth:
                dirnames[:] = []
            else:
                # Real directories first, so an alias never shadows its target.
                dirnames.sort(
                    key=lambda name: (os.path.islink(os.path.join(dirpath, name)), name)
                )

            for name in filenames:
                rel = name if depth == 0 else os.path.join(rel_dir, name)
                if matcher.fullmatch(rel.replace(os.sep, "/")) and os.path.isfile(
                    os.path.join(dirpath, name)
                ):
                    hits.append(rel)
    except (OSError, ValueError) as exc:
        logger.debug("Glob %r failed in %s: %s", pattern, directory, exc)
        return []

    hits.sort(key=lambda rel: (rel.count(os.sep), rel))
    return [Path(directory, rel) for rel in hits]


def glob_up(pattern: str, start: StrPath, stop: StrPath | None = None) -> list[Path]:
    """Run a recursive glob at every level from *start* upward.

    ``**`` crosses directories, symlinked directories are followed and hidden
    entries are included; only files are returned.  Matches are grouped by
    level, nearest level first, and within a level shallower matches come
    first, then by name.  Each physical directory is scanned once per level,
    so symlink loops end and a directory linked from several places is listed
    under the first path that reaches it (real directories before links).
    A level where the pattern cannot be evaluated contributes no matches.
    """
    found: list[Path] = []
    for directory in _ascend(start, stop):
        found.extend(_glob_level(pattern, directory))
    return found
