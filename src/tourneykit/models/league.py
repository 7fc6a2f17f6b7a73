"""Data models for league fixtures and standings.

A :class:`LeagueMatch` is one fixture between two teams; a
:class:`StandingsRow` is one derived line of the league table.
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
from typing import Any, Dict, Optional

from tourneykit.constants import DRAW_POINTS, SIDE_A, WIN_POINTS
from tourneykit.type_hints import Side, TeamId
from tourneykit.utils import setup_logger
from tourneykit.utils.validation import validate_score

logger = setup_logger(__name__)


def fixture_id(team_a_id: TeamId, team_b_id: TeamId) -> str:
    """Key for the fixture between two teams, in registry order."""
    return f"{team_a_id}-{team_b_id}"


@dataclass
class LeagueMatch:
    """A single league fixture.

    Team names are captured when the fixture is generated and are not
    updated if a team is later renamed; the team ids are what standings use.

    Attributes:
        id: Fixture key derived from the two team ids
        team_a: Name of the first team
        team_b: Name of the second team
        team_a_id: Id of the first team, or None for legacy snapshots
        team_b_id: Id of the second team, or None for legacy snapshots
        score_a: Goals for team A, None until played
        score_b: Goals for team B, None until played
    """

    id: str
    team_a: str
    team_b: str
    team_a_id: Optional[TeamId] = None
    team_b_id: Optional[TeamId] = None
    score_a: Optional[int] = None
    score_b: Optional[int] = None

    @property
    def is_played(self) -> bool:
        """True once both scores are set."""
        return self.score_a is not None and self.score_b is not None

    @property
    def has_any_score(self) -> bool:
        return self.score_a is not None or self.score_b is not None

    def set_score(self, side: Side, value: Optional[int]) -> None:
        if side == SIDE_A:
            self.score_a = value
        else:
            self.score_b = value

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary.

        Scores are written as strings, ``""`` meaning not yet played.
        """
        return {
            "id": self.id,
            "teamA": self.team_a,
            "teamB": self.team_b,
            "teamAId": self.team_a_id,
            "teamBId": self.team_b_id,
            "scoreA": "" if self.score_a is None else str(self.score_a),
            "scoreB": "" if self.score_b is None else str(self.score_b),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeagueMatch":
        """Deserialize match from dictionary.

        Scores may be ints or strings; a score that is not a non-negative
        whole number is loaded as unset.
        """
        team_a = data["teamA"]
        team_b = data["teamB"]
        if not isinstance(team_a, str) or not isinstance(team_b, str):
            raise TypeError(f"Match teams must be names: {team_a!r}, {team_b!r}")
        return cls(
            id=str(data["id"]),
            team_a=team_a,
            team_b=team_b,
            team_a_id=data.get("teamAId"),
            team_b_id=data.get("teamBId"),
            score_a=_coerce_score(data.get("scoreA"), data["id"]),
            score_b=_coerce_score(data.get("scoreB"), data["id"]),
        )


def _coerce_score(value: Any, match_id: Any) -> Optional[int]:
    result = validate_score(value)
    if not result:
        logger.warning(
            f"Ignoring stored score for match {match_id}: {result.error_message}"
        )
        return None
    return result.sanitized_value


@dataclass
class StandingsRow:
    """One line of the league table, derived from fixtures.

    Attributes:
        team_id: Id of the team this row belongs to
        team: Current team name
        played: Fully scored matches
        won: Matches won
        draw: Matches drawn
        lost: Matches lost
    """

    team_id: TeamId
    team: str
    played: int = 0
    won: int = 0
    draw: int = 0
    lost: int = 0

    @property
    def points(self) -> int:
        return WIN_POINTS * self.won + DRAW_POINTS * self.draw
