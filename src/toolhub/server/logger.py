"""
File-only logging — stdout carries the MCP stream, so nothing here touches it

Every toolhub logger is a child of the "toolhub" logger, which owns the two
file handlers: the main log and an errors-only log. configure_logging()
binds them to the paths in Config and can be called again to re-point them.
"""

import logging
from pathlib import Path
from typing import Optional

from toolhub.config import Config

ROOT_LOGGER = "toolhub"

_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Main log file the handlers are currently bound to
_bound_to: Optional[Path] = None


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """(Re)attach the file handlers to Config.LOG_FILE and Config.ERROR_LOG."""
    global _bound_to
    Config.ensure_dirs()

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO))
    formatter = logging.Formatter(_FORMAT, datefmt=_DATEFMT)
    for path, threshold in ((Config.LOG_FILE, logging.DEBUG), (Config.ERROR_LOG, logging.ERROR)):
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(threshold)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.propagate = False
    _bound_to = Path(Config.LOG_FILE)
    return root


def get_logger(name: str) -> logging.Logger:
    """Child logger `toolhub.<name>`; handlers are set up on first use."""
    if _bound_to is None:
        configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
