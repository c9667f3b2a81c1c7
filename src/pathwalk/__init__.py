"""pathwalk — symlink-aware path containment and upward directory search."""

from pathwalk.core.filesystem import (
    ascend,
    contains,
    find_up,
    glob_up,
    normalize,
    overlaps,
    up,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ascend",
    "contains",
    "find_up",
    "glob_up",
    "normalize",
    "overlaps",
    "up",
]
