"""Knockout (single elimination) bracket management.

This module handles bracket generation, winner selection and automatic
round progression. A bracket is a list of rounds, each round a list of
:class:`~tourneykit.models.knockout.KnockoutMatch`. Rounds are only ever
appended; round ``k + 1`` is generated once every match in round ``k`` has
a winner.

Pairings come from a shuffle of the participants. The shuffle is injectable
so callers (and tests) can supply a fixed order.
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

import random
from typing import List, Optional, Sequence

from tourneykit.constants import BYE, FINAL_ROUND_LABEL, MIN_TEAMS, ROUND_LABEL
from tourneykit.exceptions import (
    InsufficientTeamsError,
    NotFoundError,
    ValidationError,
)
from tourneykit.models.enums import BracketState
from tourneykit.models.knockout import KnockoutMatch
from tourneykit.models.team import Team
from tourneykit.type_hints import Shuffler
from tourneykit.utils import setup_logger

logger = setup_logger(__name__)

Round = List[KnockoutMatch]


def random_permutation(items: List[str]) -> List[str]:
    """Uniformly random reordering of ``items`` (the input is not modified)."""
    return random.sample(items, len(items))


def pair_participants(ordered: Sequence[str]) -> Round:
    """Pair participants consecutively; an odd one out gets a bye.

    Ids come from the participant names, so names containing hyphens can
    produce the same id twice; a repeated id gets the match's position in
    the round appended until it is unique.
    """
    round_matches = []
    for i in range(0, len(ordered) - 1, 2):
        round_matches.append(KnockoutMatch.head_to_head(ordered[i], ordered[i + 1]))
    if len(ordered) % 2:
        round_matches.append(KnockoutMatch.bye(ordered[-1]))

    taken = {m.id for m in round_matches}
    seen = set()
    for position, match in enumerate(round_matches, start=1):
        if match.id in seen:
            match_id = f"{match.id}-{position}"
            while match_id in taken:
                match_id = f"{match_id}-{position}"
            match.id = match_id
            taken.add(match_id)
        seen.add(match.id)
    return round_matches


class KnockoutEngine:
    """Owns the rounds of a knockout cup.

    State transitions:
    - EMPTY -> IN_PROGRESS on :meth:`start_knockout`
    - IN_PROGRESS -> IN_PROGRESS when a round completes with several
      winners (the next round is appended)
    - IN_PROGRESS -> COMPLETE when the single match of the last round
      has a winner
    - any -> EMPTY on :meth:`reset_knockout`

    Winners can be changed after they are picked, including in a complete
    bracket; this never generates extra rounds.
    """

    def __init__(
        self,
        rounds: Optional[List[Round]] = None,
        shuffle: Optional[Shuffler] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            rounds: Existing rounds, e.g. restored from a snapshot
            shuffle: Function returning a reordered copy of a name list;
                defaults to a uniform random permutation
        """
        self.rounds: List[Round] = [list(r) for r in rounds or []]
        self.shuffle: Shuffler = shuffle or random_permutation

    # ========== State ==========

    @property
    def has_rounds(self) -> bool:
        """Whether starting a new cup would discard an existing bracket."""
        return bool(self.rounds)

    @property
    def current_round(self) -> Optional[Round]:
        return self.rounds[-1] if self.rounds else None

    @property
    def state(self) -> BracketState:
        if not self.rounds:
            return BracketState.EMPTY
        if self.champion is not None:
            return BracketState.COMPLETE
        return BracketState.IN_PROGRESS

    @property
    def champion(self) -> Optional[str]:
        """Winner of the final, or None while the cup is undecided."""
        last = self.current_round
        if last is not None and len(last) == 1 and last[0].is_decided:
            return last[0].winner
        return None

    def round_label(self, round_index: int) -> str:
        """Heading for a round: "Final" for a last round of one match."""
        self._require_round(round_index)
        is_last = round_index == len(self.rounds) - 1
        if is_last and len(self.rounds[round_index]) == 1:
            return FINAL_ROUND_LABEL
        return ROUND_LABEL.format(number=round_index + 1)

    # ========== Generation ==========

    def generate_round(self, participants: Sequence[str]) -> Round:
        """Build one round from the given participant names.

        Participants are shuffled, then paired (0, 1), (2, 3), ...; with an
        odd count the last one gets a bye that is already decided.

        Args:
            participants: Distinct participant names

        Returns:
            A list of ceil(n / 2) matches

        Raises:
            InsufficientTeamsError: If there are no participants
            ValidationError: If a name appears twice or is the bye marker
        """
        names = list(participants)
        if not names:
            raise InsufficientTeamsError("A knockout round needs at least one team")
        if len(set(names)) != len(names):
            raise ValidationError("Knockout participants must be distinct")
        if BYE in names:
            raise ValidationError(f"{BYE!r} cannot take part in a knockout round")

        shuffled = list(self.shuffle(list(names)))
        if sorted(shuffled) != sorted(names):
            raise ValueError("Shuffle must return a permutation of its input")

        return pair_participants(shuffled)

    def start_knockout(self, teams: Sequence[Team]) -> Round:
        """Replace any bracket with a new one built from ``teams``.

        Raises:
            InsufficientTeamsError: If fewer than two teams are given
        """
        if len(teams) < MIN_TEAMS:
            raise InsufficientTeamsError(
                f"Need at least {MIN_TEAMS} teams to start a knockout, got {len(teams)}"
            )

        first_round = self.generate_round([t.name for t in teams])
        if self.rounds:
            logger.info(f"Discarding knockout bracket of {len(self.rounds)} rounds")
        self.rounds = [first_round]
        logger.info(
            f"Started knockout with {len(teams)} teams: {len(first_round)} matches"
        )
        return first_round

    def reset_knockout(self) -> None:
        self.rounds = []
        logger.info("Knockout bracket reset")

    # ========== Results ==========

    def select_winner(
        self, round_index: int, match_id: str, winner: str
    ) -> KnockoutMatch:
        """Record the winner of a match and advance the bracket if possible.

        When this completes the last round and that round produced more than
        one winner, the next round is generated from the winners in match
        order (and then shuffled like any other round).

        Args:
            round_index: 0-based index of the round
            match_id: Id of the match within that round
            winner: Name of one of the match's participants

        Returns:
            The updated match

        Raises:
            NotFoundError: If the round or match does not exist
            ValidationError: If ``winner`` did not play in the match
        """
        round_matches = self._require_round(round_index)
        match = next((m for m in round_matches if m.id == match_id), None)
        if match is None:
            raise NotFoundError(
                f"No match {match_id!r} in round {round_index + 1}"
            )
        if winner not in match.participants:
            raise ValidationError(
                f"{winner!r} is not a participant of match {match.id}"
            )

        is_last_round = round_index == len(self.rounds) - 1
        if not is_last_round and match.winner != winner:
            logger.warning(
                f"Changed winner of {match.id} in round {round_index + 1}; "
                "later rounds are not regenerated"
            )
        match.winner = winner
        logger.debug(f"Round {round_index + 1}, match {match.id}: winner {winner}")

        if is_last_round and all(m.is_decided for m in round_matches):
            winners = [m.winner for m in round_matches]
            if len(winners) > 1:
                next_round = self.generate_round(winners)
                self.rounds.append(next_round)
                logger.info(
                    f"Round {round_index + 1} complete; generated round "
                    f"{len(self.rounds)} with {len(next_round)} matches"
                )
            else:
                logger.info(f"Knockout complete, champion: {winners[0]}")

        return match

    def _require_round(self, round_index: int) -> Round:
        if isinstance(round_index, bool) or not isinstance(round_index, int):
            raise NotFoundError(f"Invalid round index {round_index!r}")
        if not 0 <= round_index < len(self.rounds):
            raise NotFoundError(f"No knockout round at index {round_index}")
        return self.rounds[round_index]
