"""Centralized path management for fixme.

Everything fixme writes lives under one home directory:
- <home>/fixmes.yaml  - The store (projects and their fixmes)
- <home>/logs/        - Rotating command log
- <home>/debug        - If present, enable debug logging

The home directory is $FIXME_HOME, else $XDG_CONFIG_HOME/fixme,
else ~/.config/fixme.
"""

import logging
import os
from pathlib import Path

STORE_FILENAME = "fixmes.yaml"
LOG_FILENAME = "fixme.log"


def fixme_home() -> Path:
    """Return the fixme home directory without creating it."""
    override = os.environ.get("FIXME_HOME")
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "fixme"


def store_path() -> Path:
    """Return the default store file path (<home>/fixmes.yaml).

    The CLI's -s option (or $FIXME_STORE) overrides this.
    """
    return fixme_home() / STORE_FILENAME


def log_dir() -> Path:
    """Return the logs directory (<home>/logs/), creating it if needed."""
    d = fixme_home() / "logs"
    d.mkdir(parents=True, exist_ok=True)
    return d


def debug_enabled() -> bool:
    """Check if debug logging is enabled.

    Either FIXME_DEBUG is set to a truthy value or <home>/debug exists.
    """
    env = os.environ.get("FIXME_DEBUG", "").strip().lower()
    if env in ("1", "true", "yes", "on"):
        return True
    return (fixme_home() / "debug").exists()


def configure_logger(name: str, max_bytes: int = 10_000_000) -> logging.Logger:
    """Return the named logger, writing to <home>/logs/fixme.log.

    The file rotates at max_bytes with one backup. Level is DEBUG when
    debug_enabled(), else INFO. Calling it again for the same name is a
    no-op.
    """
    from logging.handlers import RotatingFileHandler

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = RotatingFileHandler(log_dir() / LOG_FILENAME, maxBytes=max_bytes, backupCount=1)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
    return logger
