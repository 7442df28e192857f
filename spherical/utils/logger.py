"""
Logging for the back office.

Every module logs through a named `Logger` that lives under the
`spherical` logger tree. configure_logging() installs the one stdout
handler on that tree and sets its level from the settings.
"""

import logging
import sys

ROOT_LOGGER = "spherical"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(level.upper())
    return root


class Logger:
    """`Logger("sales")` writes as `spherical.sales`."""

    def __init__(self, name: str):
        self.name = f"{ROOT_LOGGER}.{name}"
        self._logger = logging.getLogger(self.name)

    def info(self, msg: str, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._logger.warning(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        self._logger.debug(msg, *args, **kwargs)
