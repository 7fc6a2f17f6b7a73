"""Team registry for tournaments.

This module holds the set of competing teams and enforces name rules:
names are trimmed, non-empty and unique ignoring case.
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

from typing import Iterable, Iterator, List, Optional

from tourneykit.exceptions import DuplicateError, NotFoundError
from tourneykit.models.team import Team
from tourneykit.type_hints import TeamId
from tourneykit.utils import setup_logger
from tourneykit.utils.validation import (
    find_name_collision,
    name_key,
    validate_team_name,
)

logger = setup_logger(__name__)


class TeamRegistry:
    """Ordered collection of teams.

    Registration order is preserved; fixtures are generated in this order.
    Deleting a team here does not touch fixtures or brackets; the
    tournament session is responsible for that cascade.
    """

    def __init__(self, teams: Optional[Iterable[Team]] = None) -> None:
        self._teams: List[Team] = []
        for team in teams or []:
            self._check_unique(team.name)
            if self.get(team.id) is not None:
                raise DuplicateError(f"Team id {team.id!r} is used twice")
            self._teams.append(team)

    def __len__(self) -> int:
        return len(self._teams)

    def __iter__(self) -> Iterator[Team]:
        return iter(list(self._teams))

    @property
    def teams(self) -> List[Team]:
        """Snapshot of the teams in registration order."""
        return list(self._teams)

    def names(self) -> List[str]:
        return [t.name for t in self._teams]

    def get(self, team_id: TeamId) -> Optional[Team]:
        for team in self._teams:
            if team.id == team_id:
                return team
        return None

    def find_by_name(self, name: str) -> Optional[Team]:
        """Look up a team by name, ignoring case and surrounding spaces."""
        key = name_key(name)
        for team in self._teams:
            if name_key(team.name) == key:
                return team
        return None

    def require(self, team_id: TeamId) -> Team:
        team = self.get(team_id)
        if team is None:
            raise NotFoundError(f"No team with id {team_id!r}")
        return team

    # ========== Mutations ==========

    def add_team(self, name: str) -> Team:
        """Register a new team.

        Args:
            name: Team name; surrounding whitespace is ignored

        Returns:
            The newly created Team

        Raises:
            ValidationError: If the name is empty
            DuplicateError: If a team with the same name already exists
        """
        trimmed = validate_team_name(name).unwrap()
        self._check_unique(trimmed)

        team = Team(name=trimmed)
        self._teams.append(team)
        logger.info(f"Added team: {team.name} ({team.id})")
        return team

    def rename_team(self, team_id: TeamId, new_name: str) -> Team:
        """Rename a team in place, keeping its id.

        Fixtures and bracket entries that captured the old name are left
        as they are.

        Raises:
            NotFoundError: If no team has this id
            ValidationError: If the new name is empty
            DuplicateError: If another team already uses the name
        """
        team = self.require(team_id)
        trimmed = validate_team_name(new_name).unwrap()
        self._check_unique(trimmed, ignore=team)

        old_name = team.name
        team.name = trimmed
        logger.info(f"Renamed team {team.id}: {old_name} -> {team.name}")
        return team

    def delete_team(self, team_id: TeamId) -> Team:
        """Remove a team.

        Raises:
            NotFoundError: If no team has this id
        """
        team = self.require(team_id)
        self._teams.remove(team)
        logger.info(f"Removed team: {team.name} ({team.id})")
        return team

    def clear(self) -> None:
        self._teams.clear()

    def _check_unique(self, name: str, ignore: Optional[Team] = None) -> None:
        others = (t.name for t in self._teams if t is not ignore)
        clash = find_name_collision(name, others)
        if clash is not None:
            raise DuplicateError(f"Team {clash!r} already exists")
