"""
Loguru sinks for the journali CLI.

Library modules only ever do ``from loguru import logger``; adding sinks is
the CLI's job. ``setup_logging()`` runs once per command.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "journali: <level>{level.name}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = "WARNING", log_file: str | Path | None = None) -> None:
    """
    Send log records to stderr at *level* and, when given, to *log_file*.

    The file sink records INFO and above even when the console is quieter,
    so a failed save or a quarantined blob always leaves a trace. It rotates
    at 1 MB and keeps the last five files.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, backtrace=False, diagnose=False)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_level = min(logger.level(level).no, logger.level("INFO").no)
        logger.add(path, level=file_level, format=FILE_FORMAT, rotation="1 MB", retention=5, encoding="utf-8")
