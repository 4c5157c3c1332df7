# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import logging

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from edgytable.config import TableSettings


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        return logging.getLevelName(self.value)


def setup_logging(settings: "TableSettings") -> logging.Logger:
    """
    Configure the package logger from settings.

    Only the ``edgytable`` logger level is set, handlers stay under the
    control of the host application.
    """
    logger = logging.getLogger("edgytable")
    logger.setLevel(settings.log_level.to_logging_level())

    return logger


__all__ = [
    "LogLevel",
    "setup_logging",
]
