"""Scoped listing of active fixmes."""

from enum import Enum
from pathlib import Path
from typing import NamedTuple

from fixme_core.errors import NoProjectForDirectory
from fixme_core.models import Fixme, FixId, Project
from fixme_core.store import Store


class ListScope(Enum):
    DIRECTORY = "directory"
    PROJECT = "project"
    ALL = "all"


class ListEntry(NamedTuple):
    project: Project
    project_index: int
    fixme: Fixme
    fixme_index: int

    @property
    def fix_id(self) -> FixId:
        return FixId(self.project_index, self.fixme_index)


def list_fixmes(s: Store, scope: ListScope, current_dir: Path) -> list[ListEntry]:
    """Active fixmes visible from current_dir, newest first.

    DIRECTORY matches fixmes recorded exactly at current_dir, PROJECT
    everything in projects containing current_dir, ALL everything.
    DIRECTORY and PROJECT raise NoProjectForDirectory when no project
    contains current_dir.
    """
    if scope != ListScope.ALL and not any(p.contains(current_dir) for p in s.projects):
        raise NoProjectForDirectory(current_dir)

    entries: list[ListEntry] = []
    for p_idx, project in enumerate(s.projects):
        if scope != ListScope.ALL and not project.contains(current_dir):
            continue
        for f_idx, fixme in project.indexed_fixmes(active_only=True):
            if scope == ListScope.DIRECTORY and fixme.location != current_dir:
                continue
            entries.append(ListEntry(project, p_idx, fixme, f_idx))

    # stable: equal timestamps keep store order
    return sorted(entries, key=lambda e: e.fixme.created, reverse=True)
