"""Shared utilities for Court Queue."""

# Court Queue
# Copyright (C) 2025  Court Queue developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import sys
from datetime import datetime, timezone

from courtqueue.constants import (
    DEFAULT_LOG_LEVEL,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL_ENV_VAR,
    LOGGER_ROOT,
)


def _configure_root_logger() -> logging.Logger:
    root_logger = logging.getLogger(LOGGER_ROOT)
    if root_logger.handlers:
        return root_logger

    level_name = os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    root_logger.setLevel(getattr(logging, level_name, logging.WARNING))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    root_logger.addHandler(handler)
    return root_logger


def setup_logger(name: str) -> logging.Logger:
    """Get a logger for a module of the package.

    The shared ``courtqueue`` root logger is configured on first use; its level
    is read from the ``COURTQUEUE_LOG_LEVEL`` environment variable.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    _configure_root_logger()
    return logging.getLogger(name)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


__all__ = ["setup_logger", "utc_now"]
