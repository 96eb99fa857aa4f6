"""The backup and count commands."""

from __future__ import annotations

import os

import click

from .._exclude import DEFAULT_IGNORE_FILENAMES, PathMatcher
from ..backup import (
    BackupObserver,
    BackupRequest,
    CollisionPolicy,
    count_files,
    run_backup,
)
from ..exceptions import BackupRequestError
from ._helpers import (
    main,
    _build_blacklist,
    _filter_options,
    _status,
)


class _ClickObserver(BackupObserver):
    """Echo per-file status (verbose only) and errors to stderr."""

    def __init__(self, ctx):
        self.ctx = ctx

    def on_progress(self, event):
        _status(self.ctx, f"[{event.copied_count}/{event.total_count}] {event.current_file}")

    def on_error(self, event):
        if event.file:
            click.echo(f"ERROR: {event.file}: {event.message}", err=True)
        else:
            click.echo(f"ERROR: {event.message}", err=True)


@main.command()
@click.argument("args", nargs=-1, required=True)
@_filter_options
@click.option("--no-root-name", "no_root_name", is_flag=True, default=False,
              help="Copy the contents of directory sources into TARGET "
                   "instead of TARGET/<name>.")
@click.option("--on-collision", "on_collision",
              type=click.Choice([p.value for p in CollisionPolicy], case_sensitive=False),
              default=CollisionPolicy.OVERWRITE.value, show_default=True,
              envvar="DIRBACKUP_ON_COLLISION",
              help="What to do when a destination file already exists.")
@click.pass_context
def backup(ctx, args, exclude, exclude_from, default_excludes, gitignore,
           ignore_files, no_root_name, on_collision):
    """Copy SOURCE... into TARGET.

    The last argument is the target directory; all preceding arguments are
    sources (files or directories).  The target is created if needed.
    Directory sources land in TARGET/<name> unless --no-root-name is given.

    \b
    Collision policies:
      overwrite   replace the existing file (default)
      skip        keep the existing file
      rename      write name_1.ext, name_2.ext, ...
    """
    if len(args) < 2:
        raise click.UsageError("backup requires at least one SOURCE and a TARGET")
    *sources, target = args

    request = BackupRequest(
        source_paths=[os.path.abspath(s) for s in sources],
        target_path=os.path.abspath(target),
        blacklist=_build_blacklist(exclude, exclude_from, default_excludes),
        respect_ignore_files=gitignore,
        include_source_root_name=not no_root_name,
        collision_policy=on_collision,
        ignore_filenames=ignore_files or DEFAULT_IGNORE_FILENAMES,
    )
    _status(ctx, f"Backing up {len(sources)} source(s) to {request.target_path}")
    try:
        result = run_backup(request, _ClickObserver(ctx))
    except BackupRequestError as exc:
        raise click.ClickException(str(exc))

    click.echo(result.message)
    if not result.success:
        ctx.exit(1)


@main.command()
@click.argument("sources", nargs=-1, required=True)
@_filter_options
@click.pass_context
def count(ctx, sources, exclude, exclude_from, default_excludes, gitignore,
          ignore_files):
    """Print how many files a backup of SOURCE... would copy."""
    for source in sources:
        if not os.path.exists(source):
            raise click.ClickException(f"Source path does not exist: {source}")
    matcher = PathMatcher(_build_blacklist(exclude, exclude_from, default_excludes))
    _status(ctx, f"Blacklist: {', '.join(matcher.patterns) or '(none)'}")
    total = count_files(
        sources, matcher, gitignore,
        ignore_filenames=ignore_files or DEFAULT_IGNORE_FILENAMES,
    )
    click.echo(total)
