"""Click CLI definitions for fixme.

The ``cli`` group, ``main`` entry point, and commands live here.  Shared
helpers (HelpGroup, store loading, rendering) are in ``cli.helpers``.
"""

from pathlib import Path

import click

from fixme_core import store
from fixme_core.errors import FixmeError
from fixme_core.models import Fixme, FixId
from fixme_core.pathmatch import canonicalize
from fixme_core.scope import ListScope, list_fixmes
from fixme_core.cli.helpers import (
    CONTEXT_SETTINGS,
    HelpGroup,
    console,
    current_dir,
    fail,
    format_entry,
    format_fixme,
    load_store,
    set_store_override,
    setup_logging,
    store_file,
)


@click.group(cls=HelpGroup, context_settings=CONTEXT_SETTINGS)
@click.option("-s", "--store", "store_override", default=None, envvar="FIXME_STORE",
              type=click.Path(dir_okay=False),
              help="Path to the store file (or set FIXME_STORE env var)")
def cli(store_override: str | None):
    """fixme: leave notes on directories and find them later."""
    set_store_override(Path(store_override).expanduser().resolve() if store_override else None)
    setup_logging()


@cli.command()
@click.argument("directory", default=None, required=False,
                type=click.Path(exists=True, file_okay=False))
def init(directory: str | None):
    """Register a directory as a project.

    DIRECTORY defaults to the current directory. Creates the store file
    on first use. Registering the same directory twice is harmless.
    """
    path = store_file()
    if store.ensure_store_file(path):
        click.echo(f"Created store file: {path}")
    location = canonicalize(directory) if directory else current_dir()

    data, path = load_store()
    idx, created = data.initialize_project(location)
    if created:
        store.save(data, path)
        click.echo(f"Created project {idx}: {location}")
    else:
        click.echo(f"Project {idx} already exists: {location}")


@cli.command()
@click.argument("message")
def add(message: str):
    """Add a fixme in the current directory.

    MESSAGE is the note text. Use quotes for multi-word notes.
    """
    data, path = load_store()
    fixme = Fixme(message=message, location=current_dir())
    try:
        fix_id = data.add_fixme(fixme)
    except FixmeError as e:
        fail(str(e))
    store.save(data, path)
    console().print(format_fixme(fix_id, fixme))


@cli.command("list")
@click.option("-p", "--project", "project_scope", is_flag=True, default=False,
              help="Show fixmes from the whole project")
@click.option("-a", "--all", "all_scope", is_flag=True, default=False,
              help="Show fixmes from every project")
def list_cmd(project_scope: bool, all_scope: bool):
    """Show active fixmes, newest first.

    By default only fixmes recorded in the current directory are shown.
    """
    if project_scope and all_scope:
        raise click.UsageError("--project and --all are mutually exclusive.")
    scope = ListScope.DIRECTORY
    if project_scope:
        scope = ListScope.PROJECT
    elif all_scope:
        scope = ListScope.ALL

    data, _ = load_store()
    try:
        entries = list_fixmes(data, scope, current_dir())
    except FixmeError as e:
        fail(str(e))

    if not entries:
        click.echo("No fixmes.")
        return
    out = console()
    for entry in entries:
        out.print(format_entry(entry))


@cli.command()
@click.argument("project_id", type=click.IntRange(min=0))
@click.argument("fixme_id", type=click.IntRange(min=0))
def fix(project_id: int, fixme_id: int):
    """Complete a fixme.

    PROJECT_ID and FIXME_ID are the two numbers shown as [PROJECT:FIXME]
    by 'fixme list'.
    """
    data, path = load_store()
    fix_id = FixId(project_id, fixme_id)
    try:
        changed = data.complete(fix_id)
    except FixmeError as e:
        fail(str(e))

    fixme = data.resolve(fix_id)
    if changed:
        store.save(data, path)
        console().print(format_fixme(fix_id, fixme, prefix="Completed "))
    else:
        console().print(format_fixme(fix_id, fixme, prefix="Already complete: "))


@cli.command("projects")
def projects_cmd():
    """List registered projects."""
    data, _ = load_store()
    if not data.projects:
        click.echo("No projects.")
        return
    for i, p in enumerate(data.projects):
        active = len(p.active_fixmes())
        click.echo(f"  {i}: {p.location} ({active} active / {len(p.fixmes)} total)")


@cli.command("path")
def path_cmd():
    """Print the path to the store file."""
    click.echo(str(store_file()))


def main():
    cli()


if __name__ == "__main__":
    main()
