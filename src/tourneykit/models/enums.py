"""Enumerations for tournament mode and bracket state."""

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

from enum import Enum

from tourneykit.constants import DEFAULT_MODE, MODE_KNOCKOUT, MODE_LEAGUE
from tourneykit.exceptions import ValidationError


class TournamentMode(Enum):
    """Competition currently shown to the user."""

    LEAGUE = MODE_LEAGUE
    KNOCKOUT = MODE_KNOCKOUT

    @classmethod
    def default(cls) -> "TournamentMode":
        return cls(DEFAULT_MODE)

    @classmethod
    def parse(cls, value: str) -> "TournamentMode":
        """Parse a mode string such as ``"league"`` (case-insensitive)."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValidationError(
                f"Unknown mode {value!r}; expected one of {choices}"
            ) from None


class BracketState(Enum):
    """Lifecycle of a knockout bracket."""

    EMPTY = "empty"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
