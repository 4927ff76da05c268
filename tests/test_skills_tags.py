import pytest

from archive.errors import BusinessLogicError, EntityNotFoundError, ErrorKind, ValidationError
from archive.services import ArchetypeService, RaceService, SkillService, TagService


def test_create_skill_and_duplicate_name(session):
    svc = SkillService(session)
    skill = svc.create({"name": "  Fireball ", "description": "Launches a fireball"})
    assert skill["name"] == "Fireball"
    assert skill["tags"] == []
    with pytest.raises(BusinessLogicError) as exc:
        svc.create({"name": "Fireball"})
    assert exc.value.message == 'Skill with name "Fireball" already exists'
    assert exc.value.kind is ErrorKind.BUSINESS_LOGIC


def test_create_rejects_unknown_fields(session):
    with pytest.raises(ValidationError, match="Unknown field 'power'"):
        SkillService(session).create({"name": "Heal", "power": 3})


@pytest.mark.parametrize("bad_id", ["0", "-1", "abc"])
def test_bad_ids_fail_before_storage(session, statements, bad_id):
    svc = SkillService(session)
    with pytest.raises(ValidationError, match="Skill ID must be a positive integer"):
        svc.get_one(bad_id)
    with pytest.raises(ValidationError, match="Skill ID must be a positive integer"):
        svc.update({"id": bad_id, "name": "Heal"})
    with pytest.raises(ValidationError, match="Skill ID must be a positive integer"):
        svc.delete(bad_id)
    assert statements == []


def test_get_one(session):
    svc = SkillService(session)
    created = svc.create({"name": "Heal"})
    assert svc.get_one(created["id"])["name"] == "Heal"
    assert svc.get_one(str(created["id"]))["id"] == created["id"]
    assert svc.get_one(999) is None
    with pytest.raises(ValidationError):
        svc.get_one("abc")


def test_update_only_present_fields(session):
    svc = SkillService(session)
    created = svc.create({"name": "Heal", "description": "Restore health"})
    same = svc.update({"id": created["id"]})
    assert same["name"] == "Heal"
    assert same["description"] == "Restore health"

    renamed = svc.update({"id": created["id"], "name": "Greater Heal"})
    assert renamed["name"] == "Greater Heal"
    assert renamed["description"] == "Restore health"
    assert svc.update({"id": 999, "name": "Nope"}) is None


def test_update_keeping_own_name_is_not_a_conflict(session):
    svc = SkillService(session)
    a = svc.create({"name": "Heal"})
    svc.create({"name": "Stealth"})
    assert svc.update({"id": a["id"], "name": "Heal"})["name"] == "Heal"
    with pytest.raises(BusinessLogicError, match='Skill with name "Stealth" already exists'):
        svc.update({"id": a["id"], "name": "Stealth"})


def test_exists(session):
    svc = SkillService(session)
    skill = svc.create({"name": "Archery"})
    assert svc.exists("Archery")
    assert not svc.exists("Archery", exclude_id=skill["id"])
    assert not svc.exists("Sailing")


def test_delete_skill_referenced_by_race(session):
    skills = SkillService(session)
    skill = skills.create({"name": "Fireball"})
    race = RaceService(session).create({"name": "Elf"})
    RaceService(session).associate_skills(race["id"], [skill["id"]])

    with pytest.raises(BusinessLogicError) as exc:
        skills.delete(skill["id"])
    assert exc.value.message == (
        'Cannot delete skill "Fireball" as it is being used by 1 other entities (archetypes: 0, races: 1)'
    )

    RaceService(session).dissociate_skills(race["id"], [skill["id"]])
    skills.delete(skill["id"])
    assert skills.get_one(skill["id"]) is None


def test_delete_missing_raises_not_found(session):
    with pytest.raises(EntityNotFoundError) as exc:
        SkillService(session).delete(12)
    assert exc.value.message == "Skill with ID 12 not found"
    assert exc.value.entity == "Skill"


def test_associate_tags(session):
    tags = TagService(session)
    magic = tags.create({"name": "Magic"})
    fire = tags.create({"name": "Fire"})
    skills = SkillService(session)
    skill = skills.create({"name": "Fireball"})

    out = skills.associate_tags(skill["id"], [fire["id"], magic["id"], fire["id"]])
    assert [t["name"] for t in out["tags"]] == ["Fire", "Magic"]

    # idempotent
    out = skills.associate_tags(skill["id"], [fire["id"]])
    assert len(out["tags"]) == 2

    out = skills.dissociate_tags(skill["id"], [fire["id"], 999])
    assert [t["name"] for t in out["tags"]] == ["Magic"]


def test_associate_missing_targets_or_owner(session):
    tags = TagService(session)
    magic = tags.create({"name": "Magic"})
    skills = SkillService(session)
    skill = skills.create({"name": "Fireball"})

    with pytest.raises(EntityNotFoundError) as exc:
        skills.associate_tags(skill["id"], [magic["id"], 3, 4])
    assert exc.value.message == "Tags with ID 3, 4 not found"
    assert skills.get_one(skill["id"])["tags"] == []

    with pytest.raises(EntityNotFoundError, match="Skill with ID 77 not found"):
        skills.associate_tags(77, [magic["id"]])
    with pytest.raises(ValidationError, match="Tag IDs must be an array"):
        skills.associate_tags(skill["id"], None)


def test_tag_name_pattern(session):
    svc = TagService(session)
    assert svc.create({"name": "Two-Handed_Weapon 2"})["name"] == "Two-Handed_Weapon 2"
    with pytest.raises(ValidationError, match="can only contain letters, numbers, spaces, hyphens, and underscores"):
        svc.create({"name": "Fire!"})
    with pytest.raises(ValidationError, match="cannot exceed 50 characters"):
        svc.create({"name": "x" * 51})


def test_delete_tag_in_use(session):
    tags = TagService(session)
    melee = tags.create({"name": "Melee"})
    arch = ArchetypeService(session).create({"name": "Warrior"})
    ArchetypeService(session).associate_tags(arch["id"], [melee["id"]])
    with pytest.raises(BusinessLogicError) as exc:
        tags.delete(melee["id"])
    assert exc.value.message.startswith('Cannot delete tag "Melee" as it is being used by 1 other entities')
    assert "archetypes: 1" in exc.value.message


def test_delete_skill_removes_its_tag_links(session):
    tags = TagService(session)
    magic = tags.create({"name": "Magic"})
    skills = SkillService(session)
    skill = skills.create({"name": "Fireball"})
    skills.associate_tags(skill["id"], [magic["id"]])
    skills.delete(skill["id"])
    # tag is free to delete once the skill is gone
    tags.delete(magic["id"])
    assert tags.get_one(magic["id"]) is None
