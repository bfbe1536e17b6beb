"""Fixme and project data model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, NamedTuple, Optional

from fixme_core.pathmatch import is_under

FixmeStatus = Literal["active", "complete"]

ACTIVE: FixmeStatus = "active"
COMPLETE: FixmeStatus = "complete"
VALID_FIXME_STATES = {ACTIVE, COMPLETE}


def now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class FixId(NamedTuple):
    """Positional address of a fixme: (project index, fixme index)."""

    project_index: int
    fixme_index: int

    def __str__(self) -> str:
        return f"{self.project_index}:{self.fixme_index}"


@dataclass
class Fixme:
    """A single note tied to a directory.

    ``created`` is set once; ``status`` only moves from active to complete.
    """

    message: str
    location: Path
    created: datetime = field(default_factory=now)
    status: FixmeStatus = ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE

    def complete(self) -> bool:
        """Mark complete. Returns False if it already was."""
        if self.status == COMPLETE:
            return False
        self.status = COMPLETE
        return True

    @property
    def local_created(self) -> str:
        """Creation time in the local timezone, to the second."""
        return self.created.astimezone().strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class Project:
    """A registered directory tree that owns an ordered list of fixmes."""

    location: Path
    fixmes: list[Fixme] = field(default_factory=list)

    def contains(self, path: Path) -> bool:
        return is_under(self.location, path)

    def add_fixme(self, fixme: Fixme) -> Fixme:
        """Append fixme; its index is len(self.fixmes) - 1 afterwards."""
        self.fixmes.append(fixme)
        return self.fixmes[-1]

    def fixme_at(self, index: int) -> Optional[Fixme]:
        if 0 <= index < len(self.fixmes):
            return self.fixmes[index]
        return None

    def active_fixmes(self) -> list[Fixme]:
        return [f for f in self.fixmes if f.is_active]

    def indexed_fixmes(self, active_only: bool = False) -> list[tuple[int, Fixme]]:
        """(index, fixme) pairs, keeping original positions through filtering."""
        return [
            (i, f) for i, f in enumerate(self.fixmes)
            if f.is_active or not active_only
        ]
