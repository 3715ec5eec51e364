"""Logging for jsxprops runs: a stderr stream, an optional file sink and skip reports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

_LOGGER_NAME = "jsxprops"
_BRIEF_FORMAT = "[jsxprops] %(levelname)s %(message)s"
_VERBOSE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route jsxprops diagnostics to stderr and, optionally, to ``log_file``.

    Verbose runs log at DEBUG and name the emitting module (``jsxprops.engine``,
    ``jsxprops.extractor``) instead of the bare ``[jsxprops]`` prefix.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # stdout carries JSON results.
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(
        logging.Formatter(_VERBOSE_FORMAT if verbose else _BRIEF_FORMAT)
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def log_skip(
    logger: logging.Logger, path: str, reason: object, *, line: Optional[int] = None
) -> None:
    """Report a file, or one node at ``path:line``, left out of the analysis."""
    location = f"{path}:{line}" if line is not None else path
    logger.warning("Skipped %s: %s", location, reason)


__all__ = ["configure_logging", "get_logger", "log_skip"]
