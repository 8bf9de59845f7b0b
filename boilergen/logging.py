"""Logging utilities for boilergen commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .value import Value

_LOGGER_NAME = "boilergen"

# -q, default, -v, -vv
_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the boilergen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v``/``-q`` balance (0 is the default) to a logging level."""
    index = max(0, min(len(_LEVELS) - 1, verbosity + 1))
    return _LEVELS[index]


def configure_logging(*, verbosity: int = 0) -> logging.Logger:
    """Configure the boilergen logger hierarchy with a single console handler."""
    level = level_for_verbosity(verbosity)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter("[boilergen] %(levelname)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("[boilergen] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


def log_context(logger: logging.Logger, title: str, context: "Value") -> None:
    """Emit a context tree as an indented YAML block at debug level."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    body = context.as_yaml().rstrip("\n")
    indented = "\n".join(f"  {line}" for line in body.splitlines())
    logger.debug("%s:\n%s", title, indented)


__all__ = ["configure_logging", "get_logger", "level_for_verbosity", "log_context"]
