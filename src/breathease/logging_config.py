"""
Logging Configuration
=====================
Attaches handlers to the 'breathease' package logger.

The model modules only create child loggers (``breathease.model.*``); nothing
is printed until a runner calls ``setup_logging``. Frame logs from the demo
runner arrive many times per second, so every handler shares one short,
time-stamped format.
"""
import logging
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER = "breathease"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Route the package logs to a console stream and, optionally, a file.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: Level as a number (``logging.DEBUG``) or a name (``"debug"``).
        log_file: Optional path; the file is truncated on each run.
        stream: Console stream, ``sys.stdout`` by default.

    Returns:
        The configured package logger.
    """
    level = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
