"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from ..backup import DEFAULT_BLACKLIST


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _read_exclude_from(path: str) -> list[str]:
    """Read blacklist patterns from *path*: one per line, ``#`` comments."""
    patterns = []
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


def _build_blacklist(exclude, exclude_from, default_excludes) -> list[str]:
    """Merge --default-excludes, --exclude and --exclude-from, keeping order."""
    patterns: list[str] = []
    if default_excludes:
        patterns.extend(DEFAULT_BLACKLIST)
    patterns.extend(exclude)
    if exclude_from:
        try:
            patterns.extend(_read_exclude_from(exclude_from))
        except OSError as exc:
            raise click.ClickException(f"Cannot read {exclude_from}: {exc}")
    return list(dict.fromkeys(patterns))


def _filter_options(f):
    """Shared blacklist / ignore-file options for backup and count."""
    f = click.option(
        "--ignore-file", "ignore_files", multiple=True,
        help="Ignore-file name honored with --gitignore "
             "(repeatable; default: .gitignore and .ignore).",
    )(f)
    f = click.option(
        "--gitignore", is_flag=True, default=False, envvar="DIRBACKUP_GITIGNORE",
        help="Skip entries matched by .gitignore-style files in the sources.",
    )(f)
    f = click.option(
        "--default-excludes", is_flag=True, default=False,
        help="Also exclude " + ", ".join(DEFAULT_BLACKLIST) + ".",
    )(f)
    f = click.option(
        "--exclude-from", "exclude_from", type=click.Path(exists=True, dir_okay=False),
        help="Read exclude patterns from file.",
    )(f)
    f = click.option(
        "--exclude", "-x", multiple=True,
        help="Exclude paths or path components matching a glob or name (repeatable).",
    )(f)
    return f


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """dirbackup -- copy directory trees into a backup folder.

    \b
    Quick start:
      dirbackup backup ~/project /mnt/backup
      dirbackup backup -x node_modules -x '*.log' ~/a ~/b /mnt/backup
      dirbackup count --gitignore ~/project

    \b
    Blacklist patterns are globs matched against the path relative to
    each source (``*`` also crosses '/'), or a bare name matched against
    every path component, so 'node_modules' is excluded at any depth.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
