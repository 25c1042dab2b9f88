"""Locating the mentat.toml for a shell session.

A path named on the command line wins, then ``MENTAT_CONFIG``, then the
nearest ``mentat.toml`` in the working directory or any parent.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

CONFIG_FILENAME = "mentat.toml"
CONFIG_ENV_VAR = "MENTAT_CONFIG"

logger = logging.getLogger(__name__)


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest mentat.toml at or above *start* (default: cwd)."""
    directory = (start or Path.cwd()).resolve()
    for parent in (directory, *directory.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | None = None, start: Path | None = None) -> Path | None:
    """Pick the config file for this session, or None to run on defaults.

    A file named by *explicit* or ``MENTAT_CONFIG`` that does not exist
    is reported and skipped; no walk-up happens in that case.
    """
    named = [("--config", explicit), (CONFIG_ENV_VAR, os.environ.get(CONFIG_ENV_VAR))]
    for source, value in named:
        if not value:
            continue
        path = Path(value).expanduser()
        if path.is_file():
            return path
        logger.warning("Config file %s from %s not found, using defaults", path, source)
        return None
    return find_config(start)
