"""Path containment helpers for project roots."""

from pathlib import Path
from typing import Iterator


def canonicalize(path) -> Path:
    """Return an absolute path with symlinks resolved."""
    return Path(path).expanduser().resolve()


def ancestors(path: Path) -> Iterator[Path]:
    """Yield path itself, then each parent up to the filesystem root."""
    yield path
    yield from path.parents


def is_under(root: Path, candidate: Path) -> bool:
    """True if candidate is root or lies somewhere beneath it.

    Compares whole components, so /a/bee is not under /a/b.
    """
    return candidate == root or root in candidate.parents


def relative_fragment(root: Path, candidate: Path) -> Path:
    """Return the part of candidate below root.

    Empty when candidate is root, and also when candidate is not under
    root at all; call is_under first if the difference matters.
    """
    if not is_under(root, candidate):
        return Path()
    return candidate.relative_to(root)
