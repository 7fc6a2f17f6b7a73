"""Shared helpers for TourneyKit: logging setup and id generation."""

# TourneyKit
# Copyright (C) 2025  TourneyKit developers
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
import uuid
from typing import Optional

from tourneykit.constants import LOG_FORMAT, LOG_LEVEL_ENV_VAR

ROOT_LOGGER_NAME = "tourneykit"


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a module logger under the package root logger.

    The root ``tourneykit`` logger gets a single stream handler the first
    time this is called. Its level comes from ``level`` or the
    ``TOURNEYKIT_LOG_LEVEL`` environment variable, defaulting to WARNING.

    Args:
        name: Usually ``__name__`` of the calling module
        level: Optional explicit level for the root logger

    Returns:
        The configured logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        root.setLevel(getattr(logging, env_level, logging.WARNING))
    if level is not None:
        root.setLevel(level)

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)


def generate_id(prefix: str) -> str:
    """Generate a unique identifier such as ``team-1f0c9a2b4d6e``."""
    return f"{prefix.lower()}-{uuid.uuid4().hex[:12]}"
