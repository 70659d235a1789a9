"""
Process entry point.

Neovim starts sniprun as a job with an RPC channel on stdio.  This module
loads the configuration, points the ``sniprun`` logger at the log file in
the cache directory, attaches to the parent Neovim and feeds its
notifications to a :class:`~sniprun.session.Session` until the channel
closes.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .config import Config
from .launcher import Launcher
from .session import Session
from .workspace import WorkDir

logger = logging.getLogger("sniprun")

LOG_FORMAT = "%(asctime)s [sniprun] %(levelname)s %(threadName)s - %(message)s"


def configure_logging(config: Config) -> None:
    if not logger.handlers:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.WatchedFileHandler(config.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(config.log_level)


def build_session(config: Config, host) -> Session:
    work_dir = WorkDir(config.work_dir)
    launcher = Launcher(levels=config.support_levels)
    logger.info(
        "[MAIN] Interpreters available: %s", ", ".join(launcher.registry.names())
    )
    return Session(host, work_dir, launcher)


def main() -> None:
    from .nvim import NvimHost

    config = Config.from_env()
    configure_logging(config)
    logger.info(
        "Loaded config: work_dir=%s, log_file=%s, support_levels=%s",
        config.work_dir,
        config.log_file,
        config.support_levels,
    )

    host = NvimHost.attach_parent()
    session = build_session(config, host)
    logger.info("[MAIN] SnipRun launched successfully")

    logger.info("[MAIN] Start of main event loop")
    host.run_loop(session.handle_event)
    logger.info("[MAIN] Event loop ended")
