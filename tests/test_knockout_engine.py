import math

import pytest

from conftest import keep_order
from tourneykit.constants import BYE
from tourneykit.controllers import KnockoutEngine
from tourneykit.exceptions import InsufficientTeamsError, NotFoundError, ValidationError
from tourneykit.models import BracketState, Team


def make_teams(*names):
    return [Team(name=name) for name in names]


def decide_round(engine, round_index, pick=lambda m: m.team_a):
    """Pick a winner for every undecided match of a round."""
    for match in list(engine.rounds[round_index]):
        if not match.is_decided:
            engine.select_winner(round_index, match.id, pick(match))


def snapshot(engine):
    return [[m.to_dict() for m in r] for r in engine.rounds]


@pytest.mark.parametrize("n", range(1, 12))
def test_generated_round_structure(n):
    names = [f"T{i}" for i in range(n)]
    engine = KnockoutEngine()

    for _ in range(20):
        round_matches = engine.generate_round(names)
        assert len(round_matches) == math.ceil(n / 2)

        seen = [name for m in round_matches for name in m.participants]
        assert sorted(seen) == sorted(names)

        byes = [m for m in round_matches if m.is_bye]
        assert len(byes) == n % 2
        for bye in byes:
            assert bye.team_b == BYE
            assert bye.winner == bye.team_a
        assert all(m.winner is None for m in round_matches if not m.is_bye)


def test_fixed_shuffle_gives_exact_pairings():
    engine = KnockoutEngine(shuffle=keep_order)
    round_matches = engine.generate_round(["A", "B", "C", "D", "E"])

    assert [(m.id, m.team_a, m.team_b, m.winner) for m in round_matches] == [
        ("A-B", "A", "B", None),
        ("C-D", "C", "D", None),
        ("E-bye", "E", BYE, "E"),
    ]


def test_shuffle_is_applied():
    engine = KnockoutEngine(shuffle=lambda names: list(reversed(names)))
    round_matches = engine.generate_round(["A", "B", "C", "D"])
    assert [m.id for m in round_matches] == ["D-C", "B-A"]


def test_default_shuffle_varies_pairings():
    engine = KnockoutEngine()
    draws = set()
    for _ in range(200):
        round_matches = engine.generate_round(["A", "B", "C", "D"])
        draws.add(frozenset(frozenset(m.participants) for m in round_matches))
    # Four teams can be split into pairs three ways
    assert len(draws) > 1


def test_shuffle_must_return_a_permutation():
    engine = KnockoutEngine(shuffle=lambda names: names[:-1])
    with pytest.raises(ValueError):
        engine.generate_round(["A", "B", "C"])


def test_generate_round_input_checks():
    engine = KnockoutEngine()
    with pytest.raises(InsufficientTeamsError):
        engine.generate_round([])
    with pytest.raises(ValidationError):
        engine.generate_round(["A", "A"])


@pytest.mark.parametrize("count", [0, 1])
def test_start_needs_two_teams(count):
    engine = KnockoutEngine()
    with pytest.raises(InsufficientTeamsError):
        engine.start_knockout(make_teams(*["A", "B"][:count]))
    assert engine.state is BracketState.EMPTY


def test_five_team_cup_runs_to_champion():
    engine = KnockoutEngine(shuffle=keep_order)
    engine.start_knockout(make_teams("A", "B", "C", "D", "E"))
    assert engine.state is BracketState.IN_PROGRESS
    assert [m.id for m in engine.rounds[0]] == ["A-B", "C-D", "E-bye"]

    engine.select_winner(0, "A-B", "A")
    assert len(engine.rounds) == 1
    engine.select_winner(0, "C-D", "D")

    assert len(engine.rounds) == 2
    assert [m.id for m in engine.rounds[1]] == ["A-D", "E-bye"]

    engine.select_winner(1, "A-D", "D")
    assert [m.id for m in engine.rounds[2]] == ["D-E"]
    assert engine.round_label(2) == "Final"
    assert engine.round_label(0) == "Round 1"
    assert engine.champion is None

    engine.select_winner(2, "D-E", "E")
    assert engine.state is BracketState.COMPLETE
    assert engine.champion == "E"
    assert len(engine.rounds) == 3


@pytest.mark.parametrize("n", range(2, 14))
def test_progression_sizes_and_termination(n):
    engine = KnockoutEngine()
    engine.start_knockout(make_teams(*[f"T{i}" for i in range(n)]))

    round_index = 0
    while engine.state is BracketState.IN_PROGRESS:
        rounds_before = len(engine.rounds)
        decide_round(engine, round_index)
        winners = [m.winner for m in engine.rounds[round_index]]
        if len(winners) > 1:
            assert len(engine.rounds) == rounds_before + 1
            assert len(engine.rounds[-1]) == math.ceil(len(winners) / 2)
            names = sorted(p for m in engine.rounds[-1] for p in m.participants)
            assert names == sorted(winners)
        else:
            assert len(engine.rounds) == rounds_before
        round_index += 1

    assert engine.state is BracketState.COMPLETE
    assert len(engine.rounds) == math.ceil(math.log2(n))
    assert len(engine.rounds[-1]) == 1


def test_select_winner_is_idempotent():
    engine = KnockoutEngine(shuffle=keep_order)
    engine.start_knockout(make_teams("A", "B", "C", "D"))

    engine.select_winner(0, "A-B", "B")
    first = snapshot(engine)
    engine.select_winner(0, "A-B", "B")
    assert snapshot(engine) == first

    engine.select_winner(0, "C-D", "C")
    second = snapshot(engine)
    engine.select_winner(0, "C-D", "C")
    assert snapshot(engine) == second
    assert len(engine.rounds) == 2


def test_reselecting_final_winner_does_not_add_rounds():
    engine = KnockoutEngine(shuffle=keep_order)
    engine.start_knockout(make_teams("A", "B"))
    engine.select_winner(0, "A-B", "A")
    assert engine.champion == "A"

    engine.select_winner(0, "A-B", "B")
    assert engine.champion == "B"
    assert len(engine.rounds) == 1
    assert engine.state is BracketState.COMPLETE


def test_changing_earlier_round_does_not_regenerate():
    engine = KnockoutEngine(shuffle=keep_order)
    engine.start_knockout(make_teams("A", "B", "C", "D"))
    decide_round(engine, 0)
    later = snapshot(engine)[1]

    engine.select_winner(0, "A-B", "B")
    assert engine.rounds[0][0].winner == "B"
    assert snapshot(engine)[1] == later
    assert len(engine.rounds) == 2


def test_select_winner_errors_leave_state_unchanged():
    engine = KnockoutEngine(shuffle=keep_order)
    engine.start_knockout(make_teams("A", "B", "C"))
    before = snapshot(engine)

    with pytest.raises(NotFoundError):
        engine.select_winner(1, "A-B", "A")
    with pytest.raises(NotFoundError):
        engine.select_winner(-1, "A-B", "A")
    with pytest.raises(NotFoundError):
        engine.select_winner(0, "X-Y", "X")
    with pytest.raises(ValidationError):
        engine.select_winner(0, "A-B", "C")
    with pytest.raises(ValidationError):
        engine.select_winner(0, "C-bye", BYE)

    assert snapshot(engine) == before


def test_reset_and_restart():
    engine = KnockoutEngine(shuffle=keep_order)
    assert not engine.has_rounds
    engine.start_knockout(make_teams("A", "B", "C"))
    assert engine.has_rounds

    engine.reset_knockout()
    assert engine.state is BracketState.EMPTY
    assert engine.current_round is None
    assert engine.champion is None

    engine.start_knockout(make_teams("A", "B"))
    engine.start_knockout(make_teams("A", "B", "C", "D"))
    assert len(engine.rounds) == 1
    assert len(engine.rounds[0]) == 2


def test_hyphenated_names_get_distinct_match_ids():
    engine = KnockoutEngine(shuffle=keep_order)
    first_round = engine.start_knockout(make_teams("A-B", "C", "A", "B-C"))

    ids = [m.id for m in first_round]
    assert ids == ["A-B-C", "A-B-C-2"]

    engine.select_winner(0, ids[1], "B-C")
    assert first_round[1].winner == "B-C"
    engine.select_winner(0, ids[0], "A-B")

    (final,) = engine.rounds[1]
    assert (final.team_a, final.team_b) == ("A-B", "B-C")
    engine.select_winner(1, final.id, "B-C")
    assert engine.champion == "B-C"


def test_bye_marker_cannot_enter_a_round():
    engine = KnockoutEngine(shuffle=keep_order)
    with pytest.raises(ValidationError):
        engine.generate_round(["Lions", BYE])
    with pytest.raises(ValidationError):
        engine.start_knockout([Team(name="Lions"), Team(name=BYE)])
    assert not engine.has_rounds
