# celine/apicontract/core/logging.py
"""
Logging setup for services built on contract routers.

The library itself only logs through ``logging.getLogger(__name__)``;
applications call :func:`configure_logging` once at startup.
"""
from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

from celine.apicontract.core.config import settings

LIBRARY_LOGGER = "celine.apicontract"


def configure_logging(level: str | None = None, *, json: bool = True) -> None:
    """Install a single stdout handler on the root logger.

    ``json=False`` switches to a plain text line format for local runs.
    """
    level = (level or settings.log_level).upper()
    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    if json:
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)-8s %(name)s  %(message)s")
    handler.setFormatter(formatter)

    # Replace, so uvicorn --reload does not stack handlers
    root.handlers = [handler]
    logging.getLogger(LIBRARY_LOGGER).setLevel(level)
