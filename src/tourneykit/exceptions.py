"""Exceptions for use in TourneyKit"""

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


# ========== Base Application Exception ==========


class TourneyKitException(Exception):
    """Base exception for all TourneyKit errors.

    Every error the engines raise inherits from this class, so the
    presentation layer can surface them with a single except clause.
    None of them is fatal: state is left untouched when one is raised.
    """

    pass


# ========== Input Exceptions ==========


class ValidationError(TourneyKitException):
    """Raised when input is empty or malformed.

    Examples are a blank team name, a negative or non-numeric score, or a
    knockout winner who is not one of the match's participants.
    """

    pass


class DuplicateError(TourneyKitException):
    """Raised when a team name collides with an existing one."""

    pass


# ========== Tournament Exceptions ==========


class InsufficientTeamsError(TourneyKitException):
    """Raised when fewer than two teams are available for a competition."""

    pass


class NotFoundError(TourneyKitException):
    """Raised when a team, match or round reference does not exist."""

    pass


# ========== Storage Exceptions ==========


class StorageException(TourneyKitException):
    """Base exception for persistence errors."""

    pass


class SnapshotLoadException(StorageException):
    """Raised when a persisted snapshot cannot be decoded."""

    pass
