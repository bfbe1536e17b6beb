"""Tests for fixme_core.paths — home directory, debug flag, logging."""

import logging
from pathlib import Path

import pytest

from fixme_core import paths


@pytest.fixture
def fresh_logger():
    """Yield a logger factory and drop the handlers it attached afterwards."""
    created = []

    def _make(name):
        logger = paths.configure_logger(name)
        created.append(logger)
        return logger

    yield _make
    for logger in created:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)


class TestFixmeHome:
    """Tests for home directory resolution."""

    def test_env_override(self, fixme_home):
        """FIXME_HOME wins over everything else."""
        assert paths.fixme_home() == fixme_home

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        """Without FIXME_HOME, XDG_CONFIG_HOME/fixme is used."""
        monkeypatch.delenv("FIXME_HOME")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert paths.fixme_home() == tmp_path / "xdg" / "fixme"

    def test_default_under_home(self, tmp_path, monkeypatch):
        """With neither variable set, ~/.config/fixme is used."""
        monkeypatch.delenv("FIXME_HOME")
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert paths.fixme_home() == Path(tmp_path) / ".config" / "fixme"

    def test_store_path(self, fixme_home):
        """The default store lives in the home directory."""
        assert paths.store_path() == fixme_home / paths.STORE_FILENAME

    def test_log_dir_created(self, fixme_home):
        """log_dir() creates <home>/logs on demand."""
        d = paths.log_dir()
        assert d == fixme_home / "logs"
        assert d.is_dir()


class TestDebug:
    """Tests for debug_enabled."""

    def test_off_by_default(self):
        """No variable and no debug file means debug is off."""
        assert not paths.debug_enabled()

    def test_env_var(self, monkeypatch):
        """A truthy FIXME_DEBUG turns debug on."""
        monkeypatch.setenv("FIXME_DEBUG", "1")
        assert paths.debug_enabled()

    def test_env_var_false(self, monkeypatch):
        """A falsy FIXME_DEBUG leaves debug off."""
        monkeypatch.setenv("FIXME_DEBUG", "0")
        assert not paths.debug_enabled()

    def test_debug_file(self, fixme_home):
        """A <home>/debug file turns debug on until it is removed."""
        fixme_home.mkdir(parents=True, exist_ok=True)
        flag = fixme_home / "debug"
        flag.touch()
        assert paths.debug_enabled()
        flag.unlink()
        assert not paths.debug_enabled()


class TestConfigureLogger:
    """Tests for configure_logger."""

    def test_writes_to_log_file(self, fixme_home, fresh_logger):
        """Records land in <home>/logs/fixme.log with the logger name."""
        logger = fresh_logger("fixme.test.file")
        logger.info("hello log")
        for h in logger.handlers:
            h.flush()
        content = (fixme_home / "logs" / paths.LOG_FILENAME).read_text()
        assert "hello log" in content
        assert "fixme.test.file" in content
        assert not logger.propagate

    def test_no_duplicate_handlers(self, fresh_logger):
        """Configuring the same logger twice keeps one handler."""
        logger = fresh_logger("fixme.test.dupes")
        paths.configure_logger("fixme.test.dupes")
        assert len(logger.handlers) == 1

    def test_info_level_by_default(self, fresh_logger):
        """Without debug the logger is at INFO."""
        assert fresh_logger("fixme.test.info").level == logging.INFO

    def test_debug_level(self, monkeypatch, fresh_logger):
        """With debug on the logger is at DEBUG."""
        monkeypatch.setenv("FIXME_DEBUG", "true")
        assert fresh_logger("fixme.test.debug").level == logging.DEBUG
