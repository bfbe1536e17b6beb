"""Shared test fixtures and helpers for fixme_core tests."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from fixme_core.cli.helpers import set_store_override
from fixme_core.models import Fixme

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def fixme_home(tmp_path, monkeypatch):
    """Point fixme at a throwaway home directory for every test."""
    home = tmp_path / "fixme-home"
    monkeypatch.setenv("FIXME_HOME", str(home))
    monkeypatch.delenv("FIXME_STORE", raising=False)
    monkeypatch.delenv("FIXME_DEBUG", raising=False)
    set_store_override(None)
    yield home
    set_store_override(None)


def make_fixme(message: str, location: str, minutes: int = 0, **kwargs) -> Fixme:
    """Fixme created ``minutes`` after BASE_TIME."""
    return Fixme(
        message=message,
        location=Path(location),
        created=BASE_TIME + timedelta(minutes=minutes),
        **kwargs,
    )
