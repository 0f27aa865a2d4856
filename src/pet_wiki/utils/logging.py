"""Rich console logging shared by the CLI and the import jobs."""

import logging
from typing import Iterable, Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

PACKAGE_LOGGER = "pet_wiki"

# SQL statement echo floods the console at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")

_loggers: dict[str, logging.Logger] = {}


def setup_logging(level: str = "INFO", quiet: Iterable[str] = QUIET_LOGGERS) -> None:
    """
    Route log records through a RichHandler on the shared console.

    Args:
        level: Level name; unknown names fall back to INFO
        quiet: Logger names capped at WARNING
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a module, or the package logger when no name is given."""
    name = name or PACKAGE_LOGGER
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]
