from tourneykit.controllers.knockout_engine import KnockoutEngine, random_permutation
from tourneykit.controllers.league_engine import LeagueEngine, compute_standings
from tourneykit.controllers.team_registry import TeamRegistry

__all__ = [
    "KnockoutEngine",
    "LeagueEngine",
    "TeamRegistry",
    "compute_standings",
    "random_permutation",
]
