"""Errors raised by the fixme core.

None of these are recovered from inside the core; the CLI reports them
and exits non-zero.
"""

from pathlib import Path


class FixmeError(Exception):
    """Base class for fixme core errors."""


class NoProjectForPath(FixmeError):
    """Raised when a fixme is added outside every registered project."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"No project initialized for {path}. Run 'fixme init' first."
        )


class NoProjectForDirectory(FixmeError):
    """Raised when a scoped listing is requested outside every project."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"No project contains {path}. Run 'fixme init' first, "
            f"or use 'fixme list --all'."
        )


class StoreFormatError(FixmeError):
    """Raised when the store file cannot be parsed into projects and fixmes."""


class AddressError(FixmeError, IndexError):
    """A (project, fixme) address that does not point at a stored fixme."""

    def __init__(self, address, message: str):
        self.address = address
        super().__init__(message)


class ProjectOutOfBounds(AddressError):
    """The project index is past the last registered project."""

    def __init__(self, address, project_count: int):
        self.project_count = project_count
        super().__init__(
            address,
            f"No project {address.project_index} "
            f"({project_count} project{'s' if project_count != 1 else ''} registered)",
        )


class FixmeOutOfBounds(AddressError):
    """The project exists but the fixme index is past its last fixme."""

    def __init__(self, address, fixme_count: int):
        self.fixme_count = fixme_count
        super().__init__(
            address,
            f"No fixme {address.fixme_index} in project {address.project_index} "
            f"({fixme_count} fixme{'s' if fixme_count != 1 else ''} recorded)",
        )
