"""Shared helpers for the fixme CLI package.

HelpGroup, store file resolution, rendering, and error exits.
"""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text

from fixme_core import store
from fixme_core.errors import FixmeError
from fixme_core.models import Fixme, FixId
from fixme_core.pathmatch import canonicalize, relative_fragment
from fixme_core.paths import configure_logger, store_path
from fixme_core.scope import ListEntry

_log = logging.getLogger("fixme.cli")

# Module-level state set by the cli() group callback via set_store_override()
_store_override: Path | None = None

# Shared Click settings: make -h and --help both work everywhere
CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def set_store_override(path: Path | None) -> None:
    """Set the store file override (called by the cli group callback)."""
    global _store_override
    _store_override = path


def setup_logging() -> None:
    configure_logger("fixme.cli")
    configure_logger("fixme.store")


def _help_alias(args: list[str]) -> list[str]:
    """Turn a leading 'help' argument into '--help'."""
    if args and args[0] == "help":
        return ["--help", *args[1:]]
    return args


class HelpGroup(click.Group):
    """Group that accepts ``help`` wherever ``--help`` works.

    ``fixme help`` shows the group help, ``fixme list help`` the command's.
    """

    def resolve_command(self, ctx, args):
        if self.get_command(ctx, "help") is None:
            args = _help_alias(args)
        name, cmd, rest = super().resolve_command(ctx, args)
        if cmd is not None and not isinstance(cmd, click.Group):
            rest = _help_alias(rest)
        return name, cmd, rest


def store_file() -> Path:
    """Path of the store file for this invocation."""
    return _store_override or store_path()


def current_dir() -> Path:
    return canonicalize(Path.cwd())


def fail(message: str) -> None:
    """Report an error on stderr and exit with status 1."""
    _log.warning(message)
    click.echo(message, err=True)
    raise SystemExit(1)


def load_store() -> tuple[store.Store, Path]:
    """Load the store for this invocation, exiting if it is missing or unreadable."""
    path = store_file()
    try:
        return store.load(path), path
    except (FileNotFoundError, FixmeError) as e:
        fail(str(e))


def console() -> Console:
    # soft_wrap keeps each entry on one line regardless of terminal width
    return Console(highlight=False, soft_wrap=True)


def format_fixme(fix_id: FixId, fixme: Fixme, prefix: str = "") -> Text:
    """One-line rendering of a single fixme with its address."""
    text = Text(prefix)
    text.append(f"[{fix_id}] ", style="bold cyan")
    text.append(fixme.local_created, style="dim")
    text.append(f" ({fixme.location}) ")
    text.append(fixme.message)
    return text


def format_entry(entry: ListEntry) -> Text:
    """Listing row: address, date, project root, folder below it, message."""
    fragment = relative_fragment(entry.project.location, entry.fixme.location)
    folder = "" if fragment == Path() else fragment.as_posix()
    text = Text()
    text.append(f"[{entry.fix_id}] ", style="bold cyan")
    text.append(entry.fixme.local_created, style="dim")
    text.append(f" {entry.project.location}: ", style="green")
    text.append(f"/{folder:<20} ", style="yellow")
    text.append(entry.fixme.message)
    return text
