from tourneykit.models.enums import BracketState, TournamentMode
from tourneykit.models.knockout import KnockoutMatch
from tourneykit.models.league import LeagueMatch, StandingsRow
from tourneykit.models.team import Team

__all__ = [
    "BracketState",
    "KnockoutMatch",
    "LeagueMatch",
    "StandingsRow",
    "Team",
    "TournamentMode",
]
