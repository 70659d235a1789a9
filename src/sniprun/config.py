"""Configuration loader.

sniprun reads its configuration from environment variables, which Neovim
passes down to the process it spawns.  Defaults make a plain install work
without any setup.

Environment variables:

``SNIPRUN_WORK_DIR``
    Cache directory holding the per‑invocation working directories and the
    log file.  Defaults to ``$XDG_CACHE_HOME/sniprun``, or
    ``~/.cache/sniprun`` when ``XDG_CACHE_HOME`` is unset.

``SNIPRUN_LOG_FILE``
    Path of the log file.  Defaults to ``sniprun.log`` inside the work dir.

``SNIPRUN_LOG_LEVEL``
    Standard logging level name.  Default is ``INFO``.

``SNIPRUN_SUPPORT_LEVELS``
    Comma‑separated ``Name=level`` pairs lowering the level a backend runs
    at, e.g. ``Rust_original=line``.  Backends not listed run at their
    maximum level.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from .models import SupportLevel


def _default_work_dir() -> str:
    cache_home = os.getenv("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return str(Path(cache_home) / "sniprun")


def _parse_levels(value: str | None) -> Dict[str, SupportLevel]:
    levels: Dict[str, SupportLevel] = {}
    if not value:
        return levels
    for item in value.split(","):
        if not item.strip():
            continue
        name, sep, level = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Invalid SNIPRUN_SUPPORT_LEVELS entry: {item!r}")
        levels[name.strip()] = SupportLevel.parse(level)
    return levels


@dataclass
class Config:
    """Centralised configuration object."""

    work_dir: str
    log_file: str
    log_level: int = logging.INFO
    support_levels: Dict[str, SupportLevel] = field(default_factory=dict)

    @classmethod
    def load(cls) -> "Config":
        work_dir = os.getenv("SNIPRUN_WORK_DIR") or _default_work_dir()
        log_file = os.getenv("SNIPRUN_LOG_FILE") or str(Path(work_dir) / "sniprun.log")

        level_name = os.getenv("SNIPRUN_LOG_LEVEL", "INFO").upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            raise ValueError(f"Invalid SNIPRUN_LOG_LEVEL: {level_name}")

        return cls(
            work_dir=work_dir,
            log_file=log_file,
            log_level=log_level,
            support_levels=_parse_levels(os.getenv("SNIPRUN_SUPPORT_LEVELS")),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Alias of :meth:`load` used by the entry point."""
        return cls.load()
