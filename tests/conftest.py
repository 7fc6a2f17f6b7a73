import pytest

from tourneykit.tournament import TournamentSession


def keep_order(names):
    """Shuffle stand-in that leaves participants in the order given."""
    return list(names)


def build_session(*names, shuffle=keep_order):
    session = TournamentSession(shuffle=shuffle)
    for name in names:
        session.add_team(name)
    return session


@pytest.fixture
def session():
    return TournamentSession(shuffle=keep_order)


@pytest.fixture
def three_teams():
    return build_session("A", "B", "C")
