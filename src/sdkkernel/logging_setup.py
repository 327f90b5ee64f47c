"""Logging for SDK clients built on sdkkernel.

:func:`setup_logging` turns the ``log_level`` and ``log_file`` settings of a
:class:`~sdkkernel.config.KernelConfig` into handlers on the ``sdkkernel``
logger and returns the ``sdkkernel.http`` child that ``BaseClient`` hands to
its log middleware.  Request/response entries are emitted at DEBUG, so they
only show up when ``log_level = "DEBUG"``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from sdkkernel.config import KernelConfig

LOGGER_NAME = "sdkkernel"
HTTP_LOGGER_NAME = f"{LOGGER_NAME}.http"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    config: KernelConfig | None = None,
    *,
    console: Console | None = None,
) -> logging.Logger:
    """Install the console and file handlers described by *config*.

    Calling it again replaces the handlers installed by the previous call.

    Parameters
    ----------
    config:
        Client configuration; ``KernelConfig()`` when omitted.  Unknown
        ``log_level`` names fall back to INFO.
    console:
        Rich console for request/response output.  Defaults to stderr.

    Returns
    -------
    logging.Logger
        The ``sdkkernel.http`` logger for request/response entries.
    """
    config = config or KernelConfig()
    level = _resolve_level(config.log_level)

    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    # Bodies and templates may contain brackets; render them verbatim.
    root.addHandler(
        RichHandler(
            console=console or Console(stderr=True),
            level=level,
            show_path=False,
            markup=False,
        )
    )

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)

    return logging.getLogger(HTTP_LOGGER_NAME)
