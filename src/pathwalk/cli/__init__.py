"""CLI entry point — Click command group."""

from __future__ import annotations

import click

from pathwalk import __version__
from pathwalk.core.env import configure_logging, load_user_env

load_user_env()

_SECTIONS: dict[str, tuple[str, ...]] = {
    "Project": ("init", "root"),
    "Boundaries": ("contains", "overlaps", "normalize"),
    "Search": ("find-up", "up", "glob-up"),
}


def _quick_start(root_name: str) -> str:
    lines = [
        "Quick start:",
        f"  {root_name} root",
        f"  {root_name} find-up package.json --stop ~",
        f"  {root_name} contains ./workspace ./workspace/src/link",
    ]
    return "\n".join(lines)


def _render_grouped_index(root: click.Command, root_name: str) -> str:
    if not isinstance(root, click.Group):
        return f"  {root_name}"

    placed: set[str] = set()
    lines: list[str] = []
    for section, names in _SECTIONS.items():
        entries = [name for name in names if name in root.commands]
        if not entries:
            continue
        lines.append(f"{section}:")
        lines.extend(f"  {root_name} {name}" for name in entries)
        placed.update(entries)

    other = sorted(set(root.commands) - placed)
    if other:
        lines.append("Other:")
        lines.extend(f"  {root_name} {name}" for name in other)
    return "\n".join(lines)


class PathwalkGroup(click.Group):
    """Click group that appends a grouped command index to help output."""

    def get_help(self, ctx: click.Context) -> str:
        base = super().get_help(ctx)
        root_name = ctx.find_root().info_name or "pathwalk"
        grouped = _render_grouped_index(self, root_name)
        return f"{base}\n\n{_quick_start(root_name)}\n\nCommands by workflow:\n{grouped}"


@click.group(cls=PathwalkGroup, name="pathwalk")
@click.version_option(__version__, prog_name="pathwalk")
@click.option("-v", "--verbose", is_flag=True, help="Log skipped paths and errors to stderr.")
def cli(verbose: bool) -> None:
    """pathwalk — symlink-aware path containment and upward search."""
    configure_logging(verbose)


# Register all sub-commands on import
from pathwalk.cli import commands as _commands  # noqa: F401, E402
