# Copyright 2022-2026 Tommy Lau @ SLODT
#
# Licensed under the GPL License, Version 3.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.gnu.org/licenses/gpl-3.0.html
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging utilities for the decoder."""

from __future__ import annotations

import logging
import os

from .constants import DEBUG_ENV_VAR, PACKAGE_NAME

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str = PACKAGE_NAME) -> logging.Logger:
    """Get a logger instance for the package.

    Args:
        name: Logger name, defaults to package name

    Returns:
        Configured logger instance
    """
    if name not in _loggers:
        logger = logging.getLogger(name)
        _loggers[name] = logger
    return _loggers[name]


def setup_logging(level: int = logging.INFO) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level to set
    """
    logger = get_logger()
    logger.setLevel(level)

    # Add handler if not already present
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter(
            '[%(name)s] %(levelname)s: %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)


def get_log_level_from_env() -> int:
    """Convert the OEMESH_DEBUG environment variable to a logging level.

    The variable takes the same values as a debug counter:
        0 = CRITICAL
        1 = ERROR
        2 = WARNING
        3 = INFO
        4+ = DEBUG

    Returns:
        Logging level constant, INFO when unset or not a number
    """
    raw = os.environ.get(DEBUG_ENV_VAR)
    if raw is None:
        return logging.INFO

    try:
        debug_value = int(raw)
    except ValueError:
        return logging.INFO

    levels: dict[int, int] = {
        0: logging.CRITICAL,
        1: logging.ERROR,
        2: logging.WARNING,
        3: logging.INFO,
    }
    return levels.get(max(debug_value, 0), logging.DEBUG)

