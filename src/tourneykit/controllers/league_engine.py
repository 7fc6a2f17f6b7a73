"""League (round-robin) management.

This module builds the fixture list for a league season, records scores and
derives the league table. Standings are always recomputed from the fixture
list; nothing is accumulated between calls.
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

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tourneykit.constants import MIN_TEAMS
from tourneykit.exceptions import InsufficientTeamsError, NotFoundError
from tourneykit.models.league import LeagueMatch, StandingsRow, fixture_id
from tourneykit.models.team import Team
from tourneykit.type_hints import ScoreInput, Side, TeamId
from tourneykit.utils import setup_logger
from tourneykit.utils.validation import validate_score, validate_side

logger = setup_logger(__name__)


def build_fixtures(teams: Sequence[Team]) -> List[LeagueMatch]:
    """Build one unscored fixture for every pair of teams.

    Pairs are produced in registry order: (0, 1), (0, 2), ..., (1, 2), ...

    Raises:
        InsufficientTeamsError: If fewer than two teams are given
    """
    if len(teams) < MIN_TEAMS:
        raise InsufficientTeamsError(
            f"Need at least {MIN_TEAMS} teams to start a league, got {len(teams)}"
        )

    fixtures = []
    for i, home in enumerate(teams):
        for away in teams[i + 1 :]:
            fixtures.append(
                LeagueMatch(
                    id=fixture_id(home.id, away.id),
                    team_a=home.name,
                    team_b=away.name,
                    team_a_id=home.id,
                    team_b_id=away.id,
                )
            )
    return fixtures


def compute_standings(
    teams: Sequence[Team], matches: Iterable[LeagueMatch]
) -> List[StandingsRow]:
    """Derive the league table.

    There is one row per team currently registered. Only matches with both
    scores count. A match whose team is no longer registered is skipped.
    Rows are ordered by points then wins, both descending; teams still level
    keep registration order.

    Args:
        teams: Current teams, in registration order
        matches: League fixtures

    Returns:
        Sorted list of StandingsRow
    """
    rows: Dict[TeamId, StandingsRow] = {
        t.id: StandingsRow(team_id=t.id, team=t.name) for t in teams
    }
    ids_by_name = {t.name: t.id for t in teams}

    def row_for(team_id: Optional[TeamId], name: str) -> Optional[StandingsRow]:
        # Fixtures loaded from old snapshots only know the team name
        if team_id is None:
            team_id = ids_by_name.get(name)
        return rows.get(team_id) if team_id is not None else None

    for match in matches:
        if not match.is_played:
            continue

        row_a = row_for(match.team_a_id, match.team_a)
        row_b = row_for(match.team_b_id, match.team_b)
        if row_a is None or row_b is None:
            logger.debug(f"Skipping match {match.id}: team no longer registered")
            continue

        row_a.played += 1
        row_b.played += 1
        if match.score_a > match.score_b:
            row_a.won += 1
            row_b.lost += 1
        elif match.score_a < match.score_b:
            row_b.won += 1
            row_a.lost += 1
        else:
            row_a.draw += 1
            row_b.draw += 1

    return sorted(rows.values(), key=lambda r: (-r.points, -r.won))


class LeagueEngine:
    """Holds the fixture list of the current league season.

    This class is responsible for:
    - Generating the round-robin fixture list
    - Recording scores with validation
    - Computing standings on demand
    """

    def __init__(self, matches: Optional[List[LeagueMatch]] = None) -> None:
        self.matches: List[LeagueMatch] = list(matches or [])

    @property
    def has_fixtures(self) -> bool:
        """Whether generating fixtures would discard an existing list."""
        return bool(self.matches)

    @property
    def has_recorded_scores(self) -> bool:
        """Whether any fixture has at least one score entered."""
        return any(m.has_any_score for m in self.matches)

    def progress(self) -> Tuple[int, int]:
        """Return (fully scored fixtures, total fixtures)."""
        played = sum(1 for m in self.matches if m.is_played)
        return played, len(self.matches)

    def get_match(self, match_id: str) -> LeagueMatch:
        for match in self.matches:
            if match.id == match_id:
                return match
        raise NotFoundError(f"No league match with id {match_id!r}")

    def generate_fixtures(self, teams: Sequence[Team]) -> List[LeagueMatch]:
        """Replace the fixture list with a fresh round robin.

        Any previous fixtures and scores are discarded; callers should
        check :attr:`has_fixtures` first and confirm with the user.

        Raises:
            InsufficientTeamsError: If fewer than two teams are given
        """
        fixtures = build_fixtures(teams)
        if self.matches:
            logger.info(f"Discarding {len(self.matches)} existing fixtures")
        self.matches = fixtures
        logger.info(
            f"Generated {len(fixtures)} league fixtures for {len(teams)} teams"
        )
        return list(fixtures)

    def clear_fixtures(self) -> None:
        self.matches = []
        logger.info("Cleared league fixtures")

    def record_score(self, match_id: str, side: Side, value: ScoreInput) -> LeagueMatch:
        """Set or unset one side's score of a fixture.

        Args:
            match_id: Fixture id
            side: "A" or "B"
            value: Non-negative integer (or string of digits); None or ""
                clears the score

        Returns:
            The updated match

        Raises:
            NotFoundError: If the fixture does not exist
            ValidationError: If side or value is invalid
        """
        side = validate_side(side).unwrap()
        match = self.get_match(match_id)
        score = validate_score(value).unwrap()

        match.set_score(side, score)
        logger.debug(f"Match {match.id}: score {side} set to {score}")
        return match

    def compute_standings(
        self,
        teams: Sequence[Team],
        matches: Optional[Iterable[LeagueMatch]] = None,
    ) -> List[StandingsRow]:
        """League table for ``teams`` over this season's fixtures."""
        return compute_standings(teams, self.matches if matches is None else matches)
