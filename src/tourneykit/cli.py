"""Command-line interface for TourneyKit.

Loads the tournament from a JSON store file, applies one command and saves
the result.

Usage:
    tourneykit team add "Red Lions"
    tourneykit league generate
    tourneykit league score <match-id> A 2
    tourneykit league standings
    tourneykit --yes knockout start
    tourneykit knockout winner 1 <match-id> "Red Lions"
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

import argparse
import logging
import os
import sys
from typing import Callable, Dict, List, Optional, Tuple

from tourneykit import __version__
from tourneykit.constants import (
    APP_NAME,
    DEFAULT_STORE_FILE,
    MODE_KNOCKOUT,
    MODE_LEAGUE,
    SIDES,
    STORE_ENV_VAR,
)
from tourneykit.exceptions import NotFoundError, TourneyKitException
from tourneykit.models import BracketState, Team
from tourneykit.storage import JsonFileStore, SessionRepository
from tourneykit.tournament import TournamentSession
from tourneykit.utils import setup_logger

logger = setup_logger(__name__)

# A handler applies a command and returns True if the session changed
Handler = Callable[[TournamentSession, argparse.Namespace], bool]


# ========== Helpers ==========


def resolve_store_path(cli_value: Optional[str]) -> str:
    """Store file from --store, then the environment, then the default."""
    return cli_value or os.environ.get(STORE_ENV_VAR) or DEFAULT_STORE_FILE


def confirm(message: str, assume_yes: bool) -> bool:
    """Ask the user to confirm a destructive action."""
    if assume_yes:
        return True
    try:
        answer = input(f"{message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def find_team(session: TournamentSession, ref: str) -> Team:
    """Resolve a team by id or by name."""
    for team in session.teams:
        if str(team.id) == ref:
            return team
    team = session.registry.find_by_name(ref)
    if team is None:
        raise NotFoundError(f"No team named or with id {ref!r}")
    return team


# ========== Output ==========


def print_teams(session: TournamentSession) -> None:
    if not session.teams:
        print("No teams added yet")
        return
    for team in session.teams:
        print(f"{team.id}  {team.name}")


def print_fixtures(session: TournamentSession) -> None:
    if not session.matches:
        print("No league fixtures. Run 'league generate' to start a season.")
        return
    for number, match in enumerate(session.matches, start=1):
        score_a = "-" if match.score_a is None else match.score_a
        score_b = "-" if match.score_b is None else match.score_b
        print(
            f"Match {number:>3}  {match.team_a} {score_a} : {score_b} "
            f"{match.team_b}  [{match.id}]"
        )


def print_standings(session: TournamentSession) -> None:
    rows = session.standings()
    if not rows:
        print("No teams added yet")
        return
    width = max(len("Team"), *(len(r.team) for r in rows))
    print(f"{'Team':<{width}}  {'P':>3} {'W':>3} {'D':>3} {'L':>3} {'Pts':>4}")
    for row in rows:
        print(
            f"{row.team:<{width}}  {row.played:>3} {row.won:>3} "
            f"{row.draw:>3} {row.lost:>3} {row.points:>4}"
        )


def print_bracket(session: TournamentSession) -> None:
    knockout = session.knockout
    if not knockout.has_rounds:
        print("No knockout bracket. Run 'knockout start' to begin a cup.")
        return
    for index, round_matches in enumerate(knockout.rounds):
        print(knockout.round_label(index))
        for match in round_matches:
            result = f"winner: {match.winner}" if match.winner else "undecided"
            print(f"  {match.team_a} vs {match.team_b}  ({result})  [{match.id}]")
    if session.champion:
        print(f"Champion: {session.champion}")


def print_status(session: TournamentSession, repository: SessionRepository) -> None:
    played, total = session.league.progress()
    print(f"Mode: {session.mode.value}")
    print(f"Teams: {len(session.teams)}")
    print(f"League fixtures: {played}/{total} played")
    print(f"Knockout: {session.bracket_state.value.replace('_', ' ')}")
    if session.bracket_state is BracketState.COMPLETE:
        print(f"Champion: {session.champion}")
    saved = repository.last_saved()
    if saved is not None:
        print(f"Last saved: {saved:%Y-%m-%d %H:%M:%S %Z}")


# ========== Command Handlers ==========


def cmd_team_add(session: TournamentSession, args: argparse.Namespace) -> bool:
    team = session.add_team(args.name)
    print(f"Added team {team.name} ({team.id})")
    return True


def cmd_team_rename(session: TournamentSession, args: argparse.Namespace) -> bool:
    team = find_team(session, args.team)
    old_name = team.name
    if session.name_is_referenced(old_name):
        print(
            f"Warning: existing fixtures and bracket entries will keep the name "
            f"{old_name!r}"
        )
    session.rename_team(team.id, args.new_name)
    print(f"Renamed {old_name} to {team.name}")
    return True


def cmd_team_delete(session: TournamentSession, args: argparse.Namespace) -> bool:
    team = find_team(session, args.team)
    if session.league.has_fixtures or session.knockout.has_rounds:
        if not confirm(
            f"Delete {team.name}? League fixtures and knockout bracket will be reset.",
            args.yes,
        ):
            print("Cancelled")
            return False
    session.delete_team(team.id)
    print(f"Deleted team {team.name}")
    return True


def cmd_team_list(session: TournamentSession, args: argparse.Namespace) -> bool:
    print_teams(session)
    return False


def cmd_league_generate(session: TournamentSession, args: argparse.Namespace) -> bool:
    if session.league.has_fixtures and not confirm(
        "This will overwrite current fixtures and scores. Continue?", args.yes
    ):
        print("Cancelled")
        return False
    fixtures = session.generate_fixtures()
    print(f"Generated {len(fixtures)} fixtures")
    return True


def cmd_league_clear(session: TournamentSession, args: argparse.Namespace) -> bool:
    if session.league.has_recorded_scores and not confirm(
        "Discard all fixtures and scores?", args.yes
    ):
        print("Cancelled")
        return False
    session.clear_fixtures()
    print("League fixtures cleared")
    return True


def cmd_league_score(session: TournamentSession, args: argparse.Namespace) -> bool:
    match = session.record_score(args.match_id, args.side.upper(), args.value)
    print(
        f"{match.team_a} {'-' if match.score_a is None else match.score_a} : "
        f"{'-' if match.score_b is None else match.score_b} {match.team_b}"
    )
    return True


def cmd_league_fixtures(session: TournamentSession, args: argparse.Namespace) -> bool:
    print_fixtures(session)
    return False


def cmd_league_standings(session: TournamentSession, args: argparse.Namespace) -> bool:
    print_standings(session)
    return False


def cmd_knockout_start(session: TournamentSession, args: argparse.Namespace) -> bool:
    if session.knockout.has_rounds and not confirm(
        "This will discard the current bracket. Continue?", args.yes
    ):
        print("Cancelled")
        return False
    session.start_knockout()
    print_bracket(session)
    return True


def cmd_knockout_winner(session: TournamentSession, args: argparse.Namespace) -> bool:
    round_index = args.round - 1
    match = session.select_winner(round_index, args.match_id, args.winner)
    print(f"{match.winner} wins {match.id}")
    if session.champion:
        print(f"Champion: {session.champion}")
    return True


def cmd_knockout_reset(session: TournamentSession, args: argparse.Namespace) -> bool:
    if session.knockout.has_rounds and not confirm(
        "Discard the knockout bracket?", args.yes
    ):
        print("Cancelled")
        return False
    session.reset_knockout()
    print("Knockout bracket reset")
    return True


def cmd_knockout_show(session: TournamentSession, args: argparse.Namespace) -> bool:
    print_bracket(session)
    return False


def cmd_mode(session: TournamentSession, args: argparse.Namespace) -> bool:
    if args.mode is None:
        print(session.mode.value)
        return False
    mode = session.set_mode(args.mode)
    print(f"Mode: {mode.value}")
    return True


COMMANDS: Dict[Tuple[str, Optional[str]], Handler] = {
    ("team", "add"): cmd_team_add,
    ("team", "rename"): cmd_team_rename,
    ("team", "delete"): cmd_team_delete,
    ("team", "list"): cmd_team_list,
    ("league", "generate"): cmd_league_generate,
    ("league", "clear"): cmd_league_clear,
    ("league", "score"): cmd_league_score,
    ("league", "fixtures"): cmd_league_fixtures,
    ("league", "standings"): cmd_league_standings,
    ("knockout", "start"): cmd_knockout_start,
    ("knockout", "winner"): cmd_knockout_winner,
    ("knockout", "reset"): cmd_knockout_reset,
    ("knockout", "show"): cmd_knockout_show,
    ("mode", None): cmd_mode,
}


# ========== Parser ==========


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="tourneykit",
        description=f"{APP_NAME}: manage a league and a knockout cup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tourneykit team add "Red Lions"
  tourneykit league generate
  tourneykit league score <match-id> A 2
  tourneykit knockout winner 1 <match-id> "Red Lions"
        """,
    )
    parser.add_argument(
        "--store",
        help=f"Tournament file (default: ${STORE_ENV_VAR} or {DEFAULT_STORE_FILE})",
    )
    parser.add_argument(
        "--yes", "-y", action="store_true", help="Do not ask for confirmation"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    team = commands.add_parser("team", help="Manage teams")
    team_actions = team.add_subparsers(dest="action", required=True)
    add = team_actions.add_parser("add", help="Add a team")
    add.add_argument("name")
    rename = team_actions.add_parser("rename", help="Rename a team")
    rename.add_argument("team", help="Team name or id")
    rename.add_argument("new_name")
    delete = team_actions.add_parser("delete", help="Delete a team (resets fixtures)")
    delete.add_argument("team", help="Team name or id")
    team_actions.add_parser("list", help="List teams")

    league = commands.add_parser("league", help="Round-robin league")
    league_actions = league.add_subparsers(dest="action", required=True)
    league_actions.add_parser("generate", help="Generate (or regenerate) fixtures")
    league_actions.add_parser("clear", help="Discard fixtures and scores")
    score = league_actions.add_parser("score", help="Enter one side's score")
    score.add_argument("match_id")
    score.add_argument("side", type=str.upper, choices=SIDES)
    score.add_argument("value", nargs="?", default="", help="Score; omit to clear")
    league_actions.add_parser("fixtures", help="Show fixtures")
    league_actions.add_parser("standings", help="Show the league table")

    knockout = commands.add_parser("knockout", help="Knockout cup")
    knockout_actions = knockout.add_subparsers(dest="action", required=True)
    knockout_actions.add_parser("start", help="Draw the first round")
    winner = knockout_actions.add_parser("winner", help="Pick a match winner")
    winner.add_argument("round", type=int, help="Round number, starting at 1")
    winner.add_argument("match_id")
    winner.add_argument("winner", help="Name of the winning team")
    knockout_actions.add_parser("reset", help="Discard the bracket")
    knockout_actions.add_parser("show", help="Show the bracket")

    mode = commands.add_parser("mode", help="Show or switch the active competition")
    mode.add_argument("mode", nargs="?", choices=[MODE_LEAGUE, MODE_KNOCKOUT])

    commands.add_parser("status", help="Summary of the tournament")
    commands.add_parser("reset", help="Delete all tournament data")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("tourneykit").setLevel(logging.DEBUG)

    repository = SessionRepository(JsonFileStore(resolve_store_path(args.store)))
    session = repository.load()

    try:
        if args.command == "status":
            print_status(session, repository)
            return 0

        if args.command == "reset":
            if session.has_data and not confirm(
                "Are you sure? This will delete all data.", args.yes
            ):
                print("Cancelled")
                return 0
            session.reset_all()
            repository.clear()
            print("Tournament reset")
            return 0

        handler = COMMANDS[(args.command, getattr(args, "action", None))]
        if handler(session, args):
            repository.save(session)
        return 0
    except TourneyKitException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
