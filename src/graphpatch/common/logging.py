"""Shared logging helpers for graphpatch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO

PACKAGE_LOGGER = "graphpatch"
_HANDLER_NAME = "graphpatch.console"


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a console handler to the ``graphpatch`` logger namespace once.

    Resolution warnings (missing props, mock data, deprecated declarations and
    ``get_query``) are logged under ``graphpatch.*``; this routes them to
    ``stream`` (stderr by default) with a terse format and leaves the root logger
    alone. Repeated calls are no-ops. Pass ``force=True`` to replace the handler
    and level during tests.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    existing = [handler for handler in logger.handlers if handler.get_name() == _HANDLER_NAME]
    if existing and not force:
        return logger

    for handler in existing:
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
