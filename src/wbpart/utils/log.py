"""Logging helpers for the wbpart package.

The library itself only installs a `NullHandler` on the package logger; output
is configured by applications (the CLI calls `configure_logging`).
"""

from __future__ import annotations

import logging

_ROOT_NAME = "wbpart"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_CONSOLE_CONFIGURED = False

logging.getLogger(_ROOT_NAME).addHandler(logging.NullHandler())


def configure_logging(verbose: bool = False) -> None:
    """Attach a single console handler to the package logger (idempotent)."""
    global _CONSOLE_CONFIGURED
    root_logger = logging.getLogger(_ROOT_NAME)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if _CONSOLE_CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    root_logger.addHandler(handler)
    root_logger.propagate = False
    _CONSOLE_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger scoped under the ``wbpart`` namespace."""
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
