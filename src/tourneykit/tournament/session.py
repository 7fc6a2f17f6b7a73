"""Main TournamentSession class - orchestrates all tournament operations.

This is the primary interface for the presentation layer. It coordinates the
team registry and the two competition engines, keeps them consistent with
each other, and turns the whole state into a JSON compatible snapshot for
the storage layer.
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

from typing import Any, List, Optional

from tourneykit.constants import (
    KEY_KNOCKOUT_ROUNDS,
    KEY_MATCHES,
    KEY_MODE,
    KEY_TEAMS,
)
from tourneykit.controllers import KnockoutEngine, LeagueEngine, TeamRegistry
from tourneykit.exceptions import SnapshotLoadException, TourneyKitException
from tourneykit.models import (
    BracketState,
    KnockoutMatch,
    LeagueMatch,
    StandingsRow,
    Team,
    TournamentMode,
)
from tourneykit.models.knockout import round_from_list, round_to_list
from tourneykit.type_hints import ScoreInput, Shuffler, Side, Snapshot, TeamId
from tourneykit.utils import setup_logger

logger = setup_logger(__name__)


class TournamentSession:
    """Aggregate of everything a tournament consists of.

    The session coordinates:
    - TeamRegistry: the competing teams
    - LeagueEngine: round-robin fixtures and standings
    - KnockoutEngine: the elimination bracket

    Every operation either completes or raises a TourneyKitException
    without changing anything. Destructive operations do not ask for
    confirmation; callers use :attr:`has_data`, :meth:`mode_has_data` and
    :meth:`name_is_referenced` to decide when to prompt.
    """

    def __init__(self, shuffle: Optional[Shuffler] = None) -> None:
        """Initialize an empty session.

        Args:
            shuffle: Optional knockout shuffle, see KnockoutEngine
        """
        self.registry = TeamRegistry()
        self.mode = TournamentMode.default()
        self.league = LeagueEngine()
        self.knockout = KnockoutEngine(shuffle=shuffle)

    # ========== Properties ==========

    @property
    def teams(self) -> List[Team]:
        return self.registry.teams

    @property
    def matches(self) -> List[LeagueMatch]:
        return list(self.league.matches)

    @property
    def knockout_rounds(self) -> List[List[KnockoutMatch]]:
        return [list(r) for r in self.knockout.rounds]

    @property
    def bracket_state(self) -> BracketState:
        return self.knockout.state

    @property
    def champion(self) -> Optional[str]:
        return self.knockout.champion

    @property
    def has_data(self) -> bool:
        """Whether a full reset would discard anything."""
        return bool(
            len(self.registry) or self.league.has_fixtures or self.knockout.has_rounds
        )

    def mode_has_data(self, mode: Optional[TournamentMode] = None) -> bool:
        """Whether the given (default: active) competition has generated data."""
        mode = mode or self.mode
        if mode is TournamentMode.LEAGUE:
            return self.league.has_fixtures
        if mode is TournamentMode.KNOCKOUT:
            return self.knockout.has_rounds
        raise ValueError(f"Unhandled tournament mode: {mode!r}")

    def name_is_referenced(self, name: str) -> bool:
        """Whether fixtures or the bracket mention ``name``.

        Renaming such a team leaves those entries under the old name.
        """
        for match in self.league.matches:
            if name in (match.team_a, match.team_b):
                return True
        for round_matches in self.knockout.rounds:
            for match in round_matches:
                if name in (match.team_a, match.team_b, match.winner):
                    return True
        return False

    # ========== Team Management ==========

    def add_team(self, name: str) -> Team:
        return self.registry.add_team(name)

    def rename_team(self, team_id: TeamId, new_name: str) -> Team:
        """Rename a team; existing fixtures and bracket keep the old name."""
        old_name = self.registry.require(team_id).name
        team = self.registry.rename_team(team_id, new_name)
        if team.name != old_name and self.name_is_referenced(old_name):
            logger.warning(
                f"Team {old_name!r} renamed to {team.name!r}; existing fixtures "
                "and bracket entries still show the old name"
            )
        return team

    def delete_team(self, team_id: TeamId) -> Team:
        """Delete a team and discard fixtures and bracket, in every mode."""
        team = self.registry.delete_team(team_id)
        self.league.clear_fixtures()
        self.knockout.reset_knockout()
        return team

    # ========== League ==========

    def generate_fixtures(self) -> List[LeagueMatch]:
        return self.league.generate_fixtures(self.registry.teams)

    def clear_fixtures(self) -> None:
        self.league.clear_fixtures()

    def record_score(self, match_id: str, side: Side, value: ScoreInput) -> LeagueMatch:
        return self.league.record_score(match_id, side, value)

    def standings(self) -> List[StandingsRow]:
        return self.league.compute_standings(self.registry.teams)

    # ========== Knockout ==========

    def start_knockout(self) -> List[KnockoutMatch]:
        return self.knockout.start_knockout(self.registry.teams)

    def reset_knockout(self) -> None:
        self.knockout.reset_knockout()

    def select_winner(
        self, round_index: int, match_id: str, winner: str
    ) -> KnockoutMatch:
        return self.knockout.select_winner(round_index, match_id, winner)

    # ========== Session ==========

    def set_mode(self, mode: Any) -> TournamentMode:
        """Switch the active competition; accepts a TournamentMode or its name."""
        if not isinstance(mode, TournamentMode):
            mode = TournamentMode.parse(mode)
        if mode is not self.mode:
            logger.info(f"Mode changed: {self.mode.value} -> {mode.value}")
        self.mode = mode
        return mode

    def reset_all(self) -> None:
        """Discard teams, fixtures and bracket and return to the default mode."""
        self.registry.clear()
        self.league.clear_fixtures()
        self.knockout.reset_knockout()
        self.mode = TournamentMode.default()
        logger.info("Tournament reset")

    # ========== Serialization ==========

    def serialize(self) -> Snapshot:
        """Snapshot of the session as JSON compatible data.

        Returns:
            Dict with ``teams``, ``mode``, ``matches`` and ``knockoutRounds``
        """
        return {
            KEY_TEAMS: [t.to_dict() for t in self.registry.teams],
            KEY_MODE: self.mode.value,
            KEY_MATCHES: [m.to_dict() for m in self.league.matches],
            KEY_KNOCKOUT_ROUNDS: [round_to_list(r) for r in self.knockout.rounds],
        }

    @classmethod
    def deserialize(
        cls, snapshot: Optional[Snapshot], shuffle: Optional[Shuffler] = None
    ) -> "TournamentSession":
        """Rebuild a session from :meth:`serialize` output.

        A missing or empty snapshot gives a fresh session. So does a
        malformed one, after logging a warning.
        """
        if not snapshot:
            return cls(shuffle=shuffle)
        try:
            return cls._from_snapshot(snapshot, shuffle)
        except SnapshotLoadException as e:
            logger.warning(f"Ignoring unreadable tournament snapshot: {e}")
            return cls(shuffle=shuffle)

    @classmethod
    def _from_snapshot(
        cls, snapshot: Snapshot, shuffle: Optional[Shuffler]
    ) -> "TournamentSession":
        try:
            if not isinstance(snapshot, dict):
                raise TypeError(
                    f"Snapshot must be a mapping, got {type(snapshot).__name__}"
                )
            session = cls(shuffle=shuffle)
            session.registry = TeamRegistry(
                Team.from_dict(t) for t in _as_list(snapshot, KEY_TEAMS)
            )
            mode = snapshot.get(KEY_MODE)
            if mode:
                session.mode = TournamentMode.parse(mode)

            matches = [
                LeagueMatch.from_dict(m) for m in _as_list(snapshot, KEY_MATCHES)
            ]
            session._link_match_ids(matches)
            session.league = LeagueEngine(matches)

            rounds = [
                round_from_list(r) for r in _as_list(snapshot, KEY_KNOCKOUT_ROUNDS)
            ]
            session.knockout = KnockoutEngine(rounds, shuffle=shuffle)
        except (
            KeyError,
            TypeError,
            ValueError,
            AttributeError,
            TourneyKitException,
        ) as e:
            raise SnapshotLoadException(str(e)) from e

        logger.info(
            f"Loaded tournament: {len(session.registry)} teams, "
            f"{len(session.league.matches)} fixtures, "
            f"{len(session.knockout.rounds)} knockout rounds"
        )
        return session

    def _link_match_ids(self, matches: List[LeagueMatch]) -> None:
        """Fill in team ids for fixtures stored with names only."""
        for match in matches:
            if match.team_a_id is None:
                team = self.registry.find_by_name(match.team_a)
                match.team_a_id = team.id if team else None
            if match.team_b_id is None:
                team = self.registry.find_by_name(match.team_b)
                match.team_b_id = team.id if team else None


def _as_list(snapshot: Snapshot, key: str) -> list:
    value = snapshot.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{key!r} must be a list, got {type(value).__name__}")
    return value
