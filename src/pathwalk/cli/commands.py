"""CLI commands — init, root, boundary checks and upward searches."""

from __future__ import annotations

from pathlib import Path

import click

from pathwalk.cli import cli
from pathwalk.core import filesystem, paths

_start_option = click.option(
    "--start", default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to start from (defaults to the current directory).",
)
_stop_option = click.option(
    "--stop", default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Last directory to check before giving up.",
)


# ── init ────────────────────────────────────────────────────────────


@cli.command()
@click.option("--name", default=None, help="Project name (defaults to directory name).")
@click.option(
    "--path", "root", default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
    help="Project root directory.",
)
def init(name: str | None, root: Path) -> None:
    """Write a default pathwalk.toml."""
    from pathwalk.services import bootstrap

    try:
        target = bootstrap.init_workspace(root, name)
    except FileExistsError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"✔ Initialised pathwalk in {root}")
    click.echo(f"  → {target}")


# ── root ────────────────────────────────────────────────────────────


@cli.command()
@_start_option
@_stop_option
@click.option(
    "--marker", "markers", multiple=True,
    help="File or directory that marks a project root (repeatable).",
)
def root(start: Path, stop: Path | None, markers: tuple[str, ...]) -> None:
    """Print the nearest project root above START.

    Markers and the stop boundary default to the nearest pathwalk.toml's
    [walk] table, then to the built-in marker list.
    """
    from pathwalk.services import locator

    chosen: list[str] = list(markers)
    try:
        located = locator.load_nearest_config(start, stop)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    if located:
        cfg_path, cfg = located
        chosen = chosen or cfg.walk.markers
        stop = stop or cfg.walk.stop_path(cfg_path.parent)

    click.echo(paths.resolve_root(start, chosen or paths.DEFAULT_MARKERS, stop))


# ── boundaries ──────────────────────────────────────────────────────


@cli.command()
@click.argument("path")
def normalize(path: str) -> None:
    """Print PATH with its on-disk casing (case-insensitive filesystems only)."""
    click.echo(filesystem.normalize(path))


@cli.command()
@click.argument("parent")
@click.argument("child")
@click.pass_context
def contains(ctx: click.Context, parent: str, child: str) -> None:
    """Check that CHILD physically resolves inside PARENT.

    Symlinks are followed on both sides.  Exits 1 when it does not.
    """
    _answer(ctx, filesystem.contains(parent, child))


@cli.command()
@click.argument("a")
@click.argument("b")
@click.pass_context
def overlaps(ctx: click.Context, a: str, b: str) -> None:
    """Check lexically whether A and B are nested (either way).

    Exits 1 when neither contains the other.
    """
    _answer(ctx, filesystem.overlaps(a, b))


# ── search ──────────────────────────────────────────────────────────


@cli.command("find-up")
@click.argument("target")
@_start_option
@_stop_option
def find_up(target: str, start: Path, stop: Path | None) -> None:
    """List every TARGET from START upward, nearest first."""
    _print_matches(filesystem.find_up(target, start, stop))


@cli.command("up")
@click.argument("targets", nargs=-1, required=True)
@_start_option
@_stop_option
@click.option("--first", is_flag=True, help="Stop at the first match.")
def up_cmd(targets: tuple[str, ...], start: Path, stop: Path | None, first: bool) -> None:
    """List matches for any of TARGETS walking up from START."""
    matches = []
    for match in filesystem.up(targets, start, stop):
        matches.append(match)
        if first:
            break
    _print_matches(matches)


@cli.command("glob-up")
@click.argument("pattern")
@_start_option
@_stop_option
@click.option("--group", is_flag=True, help="Print matches under the directory level that found them.")
def glob_up(pattern: str, start: Path, stop: Path | None, group: bool) -> None:
    """Recursively glob PATTERN at every level from START upward.

    \b
    Examples:
      pathwalk glob-up "*.test.*"
      pathwalk glob-up "**/tsconfig*.json" --stop ~/src
    """
    if not group:
        _print_matches(filesystem.glob_up(pattern, start, stop))
        return

    from pathwalk.services import locator

    grouped = locator.collect(pattern, start, stop)
    if not grouped:
        click.echo("No matches.", err=True)
        return
    for level, matches in grouped.items():
        click.echo(f"{level}:")
        for match in matches:
            click.echo(f"  {match}")


# ── helpers ─────────────────────────────────────────────────────────


def _answer(ctx: click.Context, result: bool) -> None:
    click.echo("true" if result else "false")
    if not result:
        ctx.exit(1)


def _print_matches(matches: list[Path]) -> None:
    if not matches:
        click.echo("No matches.", err=True)
        return
    for match in matches:
        click.echo(match)
