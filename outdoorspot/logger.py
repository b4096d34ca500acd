'''
Central logger configuration for OutdoorSpot.

Loguru with a colorized stderr sink and one rotated file per level group
under settings.LOG_DIR:

    debug.log   DEBUG only
    info.log    INFO and WARNING
    error.log   ERROR and above, with backtraces
'''

import os
import sys

from loguru import logger

from outdoorspot.config import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<level>{level: <8}</level> "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

DIAGNOSE = settings.ENVIRONMENT == "development"

FILE_SINKS = (
    ("debug.log", "DEBUG", lambda record: record["level"].name == "DEBUG"),
    ("info.log", "INFO", lambda record: record["level"].name in ("INFO", "WARNING")),
    ("error.log", "ERROR", None),
)


def _configure():
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=DIAGNOSE,
    )

    for filename, level, record_filter in FILE_SINKS:
        logger.add(
            os.path.join(settings.LOG_DIR, filename),
            level=level,
            format=FILE_FORMAT,
            filter=record_filter,
            rotation="00:00",
            retention="30 days",
            compression="zip",
            encoding="utf-8",
            backtrace=level == "ERROR",
            diagnose=DIAGNOSE and level == "ERROR",
        )


_configure()

# from outdoorspot.logger import logger
# logger.info("Loaded {count} locations", count=10)
