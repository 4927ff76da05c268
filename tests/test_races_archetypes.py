import pytest

from archive.errors import BusinessLogicError, ValidationError
from archive.services import ArchetypeService, CharacterService, RaceService, SkillService


def test_race_modifiers_default_to_zero(session):
    race = RaceService(session).create({"name": "Human", "charismaModifier": 2})
    assert race["charismaModifier"] == 2
    assert race["healthModifier"] == 0
    assert race["skills"] == []


@pytest.mark.parametrize("value", [11, -11, 1.5, "3"])
def test_race_modifier_bounds(session, value):
    with pytest.raises(ValidationError, match="manaModifier must be an integer between -10 and 10"):
        RaceService(session).create({"name": "Elf", "manaModifier": value})


def test_race_name_length(session):
    with pytest.raises(ValidationError, match="Race name cannot exceed 50 characters"):
        RaceService(session).create({"name": "R" * 51})


def test_archetype_skills(session):
    skills = SkillService(session)
    a = skills.create({"name": "Archery"})
    b = skills.create({"name": "Tracking"})
    svc = ArchetypeService(session)
    ranger = svc.create({"name": "Ranger", "description": "Nature-attuned warrior"})
    out = svc.associate_skills(ranger["id"], [b["id"], a["id"]])
    assert [s["name"] for s in out["skills"]] == ["Archery", "Tracking"]
    with pytest.raises(BusinessLogicError, match=r"\(archetypes: 1, races: 0\)"):
        skills.delete(a["id"])


def _character(refs, **extra):
    return {
        "name": "Aldric", "userId": refs["user"]["id"], "raceId": refs["race"]["id"],
        "archetypeId": refs["archetype"]["id"],
        "health": 100, "stamina": 50, "mana": 20,
        "strength": 10, "dexterity": 10, "constitution": 10,
        "intelligence": 10, "wisdom": 10, "charisma": 10,
        **extra,
    }


def test_delete_race_and_archetype_in_use(session, refs):
    CharacterService(session).create(_character(refs))
    with pytest.raises(BusinessLogicError) as exc:
        RaceService(session).delete(refs["race"]["id"])
    assert exc.value.message == 'Cannot delete race "Elf" as it is being used by 1 characters'
    with pytest.raises(BusinessLogicError) as exc:
        ArchetypeService(session).delete(refs["archetype"]["id"])
    assert exc.value.message == 'Cannot delete archetype "Warrior" as it is being used by 1 characters'


def test_duplicate_archetype(session):
    svc = ArchetypeService(session)
    svc.create({"name": "Mage"})
    with pytest.raises(BusinessLogicError, match='Archetype with name "Mage" already exists'):
        svc.create({"name": "Mage"})
