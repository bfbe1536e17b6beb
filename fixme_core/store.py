"""Project registry and YAML read/write for the fixmes store file."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml

from fixme_core.errors import (
    FixmeOutOfBounds,
    NoProjectForPath,
    ProjectOutOfBounds,
    StoreFormatError,
)
from fixme_core.models import ACTIVE, VALID_FIXME_STATES, FixId, Fixme, Project
from fixme_core.pathmatch import ancestors
from fixme_core.paths import store_path

_log = logging.getLogger("fixme.store")


@dataclass
class Store:
    """Every registered project, in registration order.

    Project and fixme indices are never reused or compacted, so a FixId
    stays valid for as long as the store file exists.
    """

    projects: list[Project] = field(default_factory=list)

    def owning_project_index(self, path: Path) -> Optional[int]:
        """Index of the closest project whose root is path or an ancestor."""
        for ancestor in ancestors(path):
            for i, project in enumerate(self.projects):
                if project.location == ancestor:
                    return i
        return None

    def find_owning_project(self, path: Path) -> Optional[Project]:
        idx = self.owning_project_index(path)
        return None if idx is None else self.projects[idx]

    def add_fixme(self, fixme: Fixme) -> FixId:
        """Append fixme to the project owning its location.

        Raises NoProjectForPath if no registered project owns it.
        """
        idx = self.owning_project_index(fixme.location)
        if idx is None:
            raise NoProjectForPath(fixme.location)
        project = self.projects[idx]
        project.add_fixme(fixme)
        fix_id = FixId(idx, len(project.fixmes) - 1)
        _log.info("Added fixme %s in %s", fix_id, fixme.location)
        return fix_id

    def resolve(self, address: FixId) -> Fixme:
        """Return the stored fixme at address.

        The project bound is checked before the fixme bound.
        """
        if not 0 <= address.project_index < len(self.projects):
            raise ProjectOutOfBounds(address, len(self.projects))
        project = self.projects[address.project_index]
        fixme = project.fixme_at(address.fixme_index)
        if fixme is None:
            raise FixmeOutOfBounds(address, len(project.fixmes))
        return fixme

    def complete(self, address: FixId) -> bool:
        """Mark the fixme at address complete.

        Returns False when it was already complete; that is not an error.
        """
        changed = self.resolve(address).complete()
        if changed:
            _log.info("Completed fixme %s", address)
        else:
            _log.debug("Fixme %s was already complete", address)
        return changed

    def initialize_project(self, location: Path) -> tuple[int, bool]:
        """Register location as a project unless it already is one.

        Returns (project index, created).
        """
        for i, project in enumerate(self.projects):
            if project.location == location:
                return i, False
        self.projects.append(Project(location))
        _log.info("Registered project %s", location)
        return len(self.projects) - 1, True


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _parse_created(value) -> datetime:
    # Unquoted timestamps are already datetimes after yaml.safe_load.
    if isinstance(value, datetime):
        created = value
    else:
        created = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created


def fixme_from_dict(data: dict) -> Fixme:
    """Build a Fixme from its stored mapping.

    Raises StoreFormatError when location or created is missing or
    created is not a timestamp.
    """
    if not isinstance(data, dict):
        raise StoreFormatError(f"expected a mapping, got {data!r}")
    for key in ("location", "created"):
        if data.get(key) is None:
            raise StoreFormatError(f"missing '{key}'")
    try:
        created = _parse_created(data["created"])
    except ValueError:
        raise StoreFormatError(f"invalid 'created' timestamp {data['created']!r}") from None

    message = data.get("message")
    return Fixme(
        message="" if message is None else str(message),
        location=Path(data["location"]),
        created=created,
        status=data.get("status", ACTIVE),
    )


def fixme_to_dict(fixme: Fixme) -> dict:
    return {
        "message": fixme.message,
        "location": str(fixme.location),
        "created": fixme.created.isoformat(),
        "status": fixme.status,
    }


def from_dict(data: Optional[dict]) -> Store:
    """Build a Store, naming the offending entry in any StoreFormatError."""
    data = data or {}
    if not isinstance(data, dict):
        raise StoreFormatError("top level must be a mapping with a 'projects' list")
    projects = []
    for p_idx, p in enumerate(data.get("projects") or []):
        if not isinstance(p, dict) or p.get("location") is None:
            raise StoreFormatError(f"project {p_idx}: missing 'location'")
        fixmes = []
        for f_idx, f in enumerate(p.get("fixmes") or []):
            try:
                fixmes.append(fixme_from_dict(f))
            except StoreFormatError as e:
                raise StoreFormatError(f"project {p_idx}, fixme {f_idx}: {e}") from None
        projects.append(Project(location=Path(p["location"]), fixmes=fixmes))
    return Store(projects=projects)


def to_dict(s: Store) -> dict:
    return {
        "projects": [
            {
                "location": str(p.location),
                "fixmes": [fixme_to_dict(f) for f in p.fixmes],
            }
            for p in s.projects
        ]
    }


def _validate_fixme_statuses(data: Optional[dict]) -> None:
    """Normalize missing or unknown fixme statuses to 'active'.

    Malformed entries are left alone for from_dict to report.
    """
    if not isinstance(data, dict):
        return
    for project in data.get("projects") or []:
        if not isinstance(project, dict):
            continue
        for fixme in project.get("fixmes") or []:
            if isinstance(fixme, dict) and fixme.get("status") not in VALID_FIXME_STATES:
                _log.debug("Normalizing status %r of fixme in %s",
                           fixme.get("status"), fixme.get("location"))
                fixme["status"] = ACTIVE


# ---------------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------------

def ensure_store_file(path: Optional[Path] = None) -> bool:
    """Create an empty store file (and its directory) if missing.

    Returns True if the file was created.
    """
    if path is None:
        path = store_path()
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    save(Store(), path)
    _log.info("Created store file %s", path)
    return True


def load(path: Optional[Path] = None, validate: bool = True) -> Store:
    """Load the store file.

    Args:
        path: Store file (defaults to paths.store_path())
        validate: If True, normalize invalid fixme statuses

    Raises FileNotFoundError if the file is missing and StoreFormatError
    if it cannot be parsed.
    """
    if path is None:
        path = store_path()
    if not path.exists():
        raise FileNotFoundError(
            f"No fixme store at {path}. Run 'fixme init' first."
        )
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise StoreFormatError(f"{path}: not valid YAML: {e}") from None

    if validate:
        _validate_fixme_statuses(data)

    try:
        return from_dict(data)
    except StoreFormatError as e:
        raise StoreFormatError(f"{path}: {e}") from None


def save(s: Store, path: Optional[Path] = None) -> None:
    """Write the whole store to path."""
    if path is None:
        path = store_path()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(to_dict(s), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
