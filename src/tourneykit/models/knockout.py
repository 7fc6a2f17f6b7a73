"""Data model for knockout matches.

A round is a plain list of :class:`KnockoutMatch` and a bracket is a list of
rounds; see :mod:`tourneykit.controllers.knockout_engine`.
"""

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

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from tourneykit.constants import BYE, BYE_ID_SUFFIX


@dataclass
class KnockoutMatch:
    """A single elimination match.

    Attributes:
        id: Key derived from the participant names
        team_a: First participant
        team_b: Second participant, or the bye sentinel
        winner: Name of the winner, None until decided
    """

    id: str
    team_a: str
    team_b: str
    winner: Optional[str] = None

    @classmethod
    def head_to_head(cls, team_a: str, team_b: str) -> "KnockoutMatch":
        return cls(id=f"{team_a}-{team_b}", team_a=team_a, team_b=team_b)

    @classmethod
    def bye(cls, team: str) -> "KnockoutMatch":
        """A bye: the lone participant advances without playing."""
        return cls(id=f"{team}-{BYE_ID_SUFFIX}", team_a=team, team_b=BYE, winner=team)

    @property
    def is_bye(self) -> bool:
        return self.team_b == BYE

    @property
    def is_decided(self) -> bool:
        return bool(self.winner)

    @property
    def participants(self) -> Tuple[str, ...]:
        if self.is_bye:
            return (self.team_a,)
        return (self.team_a, self.team_b)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "teamA": self.team_a,
            "teamB": self.team_b,
            "winner": self.winner or "",
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnockoutMatch":
        """Deserialize match from dictionary."""
        team_a = data["teamA"]
        team_b = data["teamB"]
        winner = data.get("winner") or None
        if not isinstance(team_a, str) or not isinstance(team_b, str):
            raise TypeError(f"Match teams must be names: {team_a!r}, {team_b!r}")
        match = cls(id=str(data["id"]), team_a=team_a, team_b=team_b, winner=winner)
        if winner is not None and winner not in match.participants:
            raise ValueError(f"Winner {winner!r} did not play in match {match.id}")
        if match.is_bye and winner is None:
            match.winner = team_a
        return match


def round_to_list(matches: List[KnockoutMatch]) -> List[Dict[str, Any]]:
    return [m.to_dict() for m in matches]


def round_from_list(data: List[Dict[str, Any]]) -> List[KnockoutMatch]:
    if not isinstance(data, list) or not data:
        raise ValueError("A knockout round must be a non-empty list of matches")
    return [KnockoutMatch.from_dict(m) for m in data]
