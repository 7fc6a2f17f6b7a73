import pytest

from tourneykit.controllers import TeamRegistry
from tourneykit.exceptions import DuplicateError, NotFoundError, ValidationError
from tourneykit.models import Team


def test_add_team_trims_and_assigns_id():
    registry = TeamRegistry()
    team = registry.add_team("  Red Lions ")

    assert team.name == "Red Lions"
    assert team.id
    assert len(registry) == 1
    assert registry.get(team.id) is team


def test_ids_are_unique():
    registry = TeamRegistry()
    ids = {registry.add_team(f"Team {i}").id for i in range(20)}
    assert len(ids) == 20


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_blank_name_is_rejected(name):
    registry = TeamRegistry()
    with pytest.raises(ValidationError):
        registry.add_team(name)
    assert len(registry) == 0


def test_duplicate_name_ignores_case():
    registry = TeamRegistry()
    registry.add_team("Alpha")
    with pytest.raises(DuplicateError):
        registry.add_team("alpha")
    with pytest.raises(DuplicateError):
        registry.add_team("  ALPHA ")
    assert registry.names() == ["Alpha"]


def test_names_keep_registration_order():
    registry = TeamRegistry()
    for name in ["C", "A", "B"]:
        registry.add_team(name)
    assert registry.names() == ["C", "A", "B"]


def test_rename_keeps_id():
    registry = TeamRegistry()
    team = registry.add_team("Alpha")
    original_id = team.id

    renamed = registry.rename_team(team.id, " Omega ")

    assert renamed.id == original_id
    assert renamed.name == "Omega"
    assert registry.find_by_name("omega") is team


def test_rename_to_own_name_with_new_casing_is_allowed():
    registry = TeamRegistry()
    team = registry.add_team("alpha")
    registry.rename_team(team.id, "Alpha")
    assert team.name == "Alpha"


def test_rename_validation():
    registry = TeamRegistry()
    alpha = registry.add_team("Alpha")
    registry.add_team("Beta")

    with pytest.raises(DuplicateError):
        registry.rename_team(alpha.id, "BETA")
    with pytest.raises(ValidationError):
        registry.rename_team(alpha.id, "  ")
    with pytest.raises(NotFoundError):
        registry.rename_team("team-missing", "Gamma")
    assert alpha.name == "Alpha"


def test_delete_team():
    registry = TeamRegistry()
    alpha = registry.add_team("Alpha")
    beta = registry.add_team("Beta")

    removed = registry.delete_team(alpha.id)

    assert removed is alpha
    assert registry.teams == [beta]
    with pytest.raises(NotFoundError):
        registry.delete_team(alpha.id)


def test_registry_from_existing_teams_rejects_duplicates():
    with pytest.raises(DuplicateError):
        TeamRegistry([Team(name="Alpha", id=1), Team(name="ALPHA", id=2)])
    with pytest.raises(DuplicateError):
        TeamRegistry([Team(name="Alpha", id=1), Team(name="Beta", id=1)])


@pytest.mark.parametrize("name", ["BYE", "bye", " Bye "])
def test_bye_marker_is_reserved(name):
    registry = TeamRegistry()
    lions = registry.add_team("Lions")
    with pytest.raises(ValidationError):
        registry.add_team(name)
    with pytest.raises(ValidationError):
        registry.rename_team(lions.id, name)
    assert registry.names() == ["Lions"]
