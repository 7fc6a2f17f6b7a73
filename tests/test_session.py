import json
import logging

import pytest

from conftest import build_session, keep_order
from tourneykit.exceptions import NotFoundError, ValidationError
from tourneykit.models import BracketState, TournamentMode
from tourneykit.tournament import TournamentSession


def test_new_session_is_empty(session):
    assert session.teams == []
    assert session.mode is TournamentMode.LEAGUE
    assert session.matches == []
    assert session.knockout_rounds == []
    assert session.bracket_state is BracketState.EMPTY
    assert not session.has_data


def test_delete_team_clears_fixtures_and_bracket_in_any_mode():
    for mode in TournamentMode:
        session = build_session("A", "B", "C")
        session.generate_fixtures()
        session.start_knockout()
        session.set_mode(mode)

        session.delete_team(session.teams[1].id)

        assert [t.name for t in session.teams] == ["A", "C"]
        assert session.matches == []
        assert session.knockout_rounds == []


def test_two_team_league_then_delete():
    session = build_session("A", "B")
    (match,) = session.generate_fixtures()
    assert (match.team_a, match.team_b) == ("A", "B")

    session.delete_team(session.teams[1].id)
    assert session.matches == []


def test_delete_unknown_team_changes_nothing(three_teams):
    three_teams.generate_fixtures()
    with pytest.raises(NotFoundError):
        three_teams.delete_team("team-unknown")
    assert len(three_teams.matches) == 3


def test_rename_keeps_fixture_names_but_standings_follow_id(three_teams, caplog):
    session = three_teams
    session.generate_fixtures()
    a_vs_b = session.matches[0]
    session.record_score(a_vs_b.id, "A", 2)
    session.record_score(a_vs_b.id, "B", 0)
    assert session.name_is_referenced("A")

    with caplog.at_level(logging.WARNING, logger="tourneykit"):
        session.rename_team(session.teams[0].id, "Alpha")

    assert "still show the old name" in caplog.text
    assert session.matches[0].team_a == "A"
    rows = session.standings()
    assert (rows[0].team, rows[0].points) == ("Alpha", 3)
    assert not session.name_is_referenced("Alpha")


def test_mode_has_data(three_teams):
    session = three_teams
    assert not session.mode_has_data(TournamentMode.LEAGUE)
    assert not session.mode_has_data(TournamentMode.KNOCKOUT)

    session.generate_fixtures()
    assert session.mode_has_data()
    assert not session.mode_has_data(TournamentMode.KNOCKOUT)

    session.set_mode("knockout")
    assert not session.mode_has_data()
    session.start_knockout()
    assert session.mode_has_data()


def test_set_mode(session):
    assert session.set_mode(" KNOCKOUT ") is TournamentMode.KNOCKOUT
    assert session.set_mode(TournamentMode.LEAGUE) is TournamentMode.LEAGUE
    with pytest.raises(ValidationError):
        session.set_mode("swiss")
    assert session.mode is TournamentMode.LEAGUE


def test_reset_all(three_teams):
    session = three_teams
    session.generate_fixtures()
    session.start_knockout()
    session.set_mode(TournamentMode.KNOCKOUT)
    assert session.has_data

    session.reset_all()

    assert not session.has_data
    assert session.mode is TournamentMode.LEAGUE
    assert session.serialize() == TournamentSession().serialize()


def test_knockout_through_session():
    session = build_session("A", "B", "C", "D", "E")
    session.set_mode(TournamentMode.KNOCKOUT)
    first_round = session.start_knockout()
    assert len(first_round) == 3
    assert sum(1 for m in first_round if m.is_bye) == 1

    round_index = 0
    while session.champion is None:
        for match in session.knockout_rounds[round_index]:
            if not match.is_decided:
                session.select_winner(round_index, match.id, match.team_a)
        round_index += 1

    assert session.bracket_state is BracketState.COMPLETE
    assert session.champion == "A"


def test_serialize_is_json_compatible_and_restores(three_teams):
    session = three_teams
    session.generate_fixtures()
    session.record_score(session.matches[0].id, "A", 1)
    session.record_score(session.matches[0].id, "B", 1)
    session.start_knockout()
    session.select_winner(0, "A-B", "B")
    session.set_mode("knockout")

    snapshot = json.loads(json.dumps(session.serialize()))
    assert set(snapshot) == {"teams", "mode", "matches", "knockoutRounds"}
    assert snapshot["mode"] == "knockout"
    assert snapshot["matches"][0]["scoreA"] == "1"
    assert snapshot["matches"][1]["scoreA"] == ""

    restored = TournamentSession.deserialize(snapshot, shuffle=keep_order)
    assert restored.serialize() == session.serialize()
    assert [(r.team, r.points) for r in restored.standings()] == [
        (r.team, r.points) for r in session.standings()
    ]

    restored.select_winner(1, "B-C", "C")
    assert restored.champion == "C"


@pytest.mark.parametrize("snapshot", [None, {}])
def test_deserialize_missing_snapshot(snapshot):
    session = TournamentSession.deserialize(snapshot)
    assert not session.has_data
    assert session.mode is TournamentMode.LEAGUE


@pytest.mark.parametrize(
    "snapshot",
    [
        {"teams": "not a list"},
        {"teams": [{"id": 1}]},
        {"teams": [{"id": 1, "name": "A"}, {"id": 2, "name": "a"}]},
        {"teams": [{"id": 1, "name": "A"}], "mode": "swiss"},
        {"matches": [{"teamA": "A"}]},
        {"knockoutRounds": [[{"id": "A-B", "teamA": "A", "teamB": "B", "winner": "Z"}]]},
        {"knockoutRounds": [[]]},
        ["teams"],
    ],
)
def test_deserialize_malformed_snapshot_gives_fresh_session(snapshot, caplog):
    with caplog.at_level(logging.WARNING, logger="tourneykit"):
        session = TournamentSession.deserialize(snapshot)
    assert not session.has_data
    assert "unreadable tournament snapshot" in caplog.text


def test_deserialize_snapshot_without_team_ids_in_matches():
    snapshot = {
        "teams": [{"id": 1700000000001, "name": "A"}, {"id": 1700000000002, "name": "B"}],
        "mode": "league",
        "matches": [
            {
                "id": "1700000000001-1700000000002",
                "teamA": "A",
                "teamB": "B",
                "scoreA": "3",
                "scoreB": "x",
            }
        ],
        "knockoutRounds": [],
    }
    session = TournamentSession.deserialize(snapshot)

    (match,) = session.matches
    assert (match.team_a_id, match.team_b_id) == (1700000000001, 1700000000002)
    assert match.score_a == 3
    assert match.score_b is None

    session.record_score(match.id, "B", "1")
    rows = session.standings()
    assert [(r.team, r.points) for r in rows] == [("A", 3), ("B", 0)]


def test_deserialized_bye_without_winner_is_decided():
    snapshot = {
        "teams": [{"id": "t1", "name": "A"}],
        "knockoutRounds": [[{"id": "A-bye", "teamA": "A", "teamB": "BYE", "winner": ""}]],
    }
    session = TournamentSession.deserialize(snapshot)
    assert session.knockout_rounds[0][0].winner == "A"
