import pytest

from archive.errors import BusinessLogicError, EntityNotFoundError, ValidationError
from archive.services import CharacterService, ItemService, RaceService, TagService, UserService


def _payload(refs, **extra):
    return {
        "name": "Aldric",
        "userId": refs["user"]["id"],
        "raceId": refs["race"]["id"],
        "archetypeId": refs["archetype"]["id"],
        "health": 100, "stamina": 50, "mana": 20,
        "strength": 10, "dexterity": 12, "constitution": 14,
        "intelligence": 8, "wisdom": 9, "charisma": 11,
        **extra,
    }


def test_create_returns_aggregates(session, refs):
    out = CharacterService(session).create(
        _payload(refs, primaryWeaponId=refs["sword"]["id"], armorId=refs["armor"]["id"])
    )
    # race: strength +2, health -5; sword: strength +3; armor: health +10, dexterity +2
    assert out["aggregateStrength"] == 15
    assert out["aggregateHealth"] == 105
    assert out["aggregateDexterity"] == 14
    assert out["aggregateStamina"] == 50
    assert out["aggregateCharisma"] == 11
    assert out["race"] == {"id": refs["race"]["id"], "name": "Elf"}
    assert out["equipment"]["primaryWeapon"]["name"] == "Iron Sword"
    assert out["equipment"]["amulet"] is None
    assert out["isPublic"] is False


def test_get_one_recomputes_aggregates(session, refs):
    svc = CharacterService(session)
    created = svc.create(_payload(refs))
    assert svc.get_one(created["id"])["aggregateStrength"] == 12


def test_update_race_and_equipment_changes_aggregates(session, refs):
    svc = CharacterService(session)
    created = svc.create(_payload(refs))
    dwarf = RaceService(session).create({"name": "Dwarf", "strengthModifier": 3})
    out = svc.update({"id": created["id"], "raceId": dwarf["id"], "primaryWeaponId": refs["sword"]["id"]})
    assert out["raceId"] == dwarf["id"]
    assert out["aggregateStrength"] == 16

    out = svc.update({"id": created["id"], "primaryWeaponId": None})
    assert out["primaryWeaponId"] is None
    assert out["aggregateStrength"] == 13


@pytest.mark.parametrize(
    "extra, message",
    [
        ({"strength": 0}, "Character strength must be an integer between 1 and 20"),
        ({"charisma": 21}, "Character charisma must be an integer between 1 and 20"),
        ({"health": 0}, "Character health must be an integer of at least 1"),
        ({"nickname": "n" * 31}, "Character nickname cannot exceed 30 characters"),
        ({"description": "d" * 1001}, "Character description cannot exceed 1000 characters"),
        ({"raceId": 0}, "Race ID must be a positive integer"),
        ({"shieldId": "x"}, "Shield ID must be a positive integer"),
    ],
)
def test_field_validation(session, refs, extra, message):
    with pytest.raises(ValidationError, match=message):
        CharacterService(session).create(_payload(refs, **extra))


def test_missing_required_stat(session, refs):
    payload = _payload(refs)
    del payload["wisdom"]
    with pytest.raises(ValidationError, match="Character wisdom is required"):
        CharacterService(session).create(payload)


def test_missing_references(session, refs):
    svc = CharacterService(session)
    with pytest.raises(EntityNotFoundError, match="Race with ID 99 not found"):
        svc.create(_payload(refs, raceId=99))
    with pytest.raises(EntityNotFoundError, match="User with ID 42 not found"):
        svc.create(_payload(refs, userId=42))
    with pytest.raises(EntityNotFoundError, match="Item with ID 77 not found"):
        svc.create(_payload(refs, amuletId=77))


def test_inactive_user(session, refs):
    UserService(session).update({"id": refs["user"]["id"], "isActive": False})
    with pytest.raises(BusinessLogicError, match="Cannot create character for inactive user"):
        CharacterService(session).create(_payload(refs))


def test_name_unique_per_user(session, refs):
    svc = CharacterService(session)
    svc.create(_payload(refs))
    with pytest.raises(BusinessLogicError, match='Character with name "Aldric" already exists for this user'):
        svc.create(_payload(refs))

    bob = UserService(session, "pbkdf2:sha256:1000").create({"name": "Bob", "email": "bob@example.com", "password": "hunter2hunter2"})
    other = svc.create(_payload(refs, userId=bob["id"]))
    assert other["name"] == "Aldric"


def test_inventory_and_tags(session, refs):
    svc = CharacterService(session)
    created = svc.create(_payload(refs))
    out = svc.associate_items(created["id"], [refs["armor"]["id"], refs["sword"]["id"]])
    assert [i["name"] for i in out["items"]] == ["Iron Sword", "Leather Armor"]
    # inventory does not count toward aggregates
    assert out["aggregateStrength"] == 12

    with pytest.raises(BusinessLogicError, match=r"inventory: 1"):
        ItemService(session).delete(refs["sword"]["id"])

    hero = TagService(session).create({"name": "Hero"})
    out = svc.associate_tags(created["id"], [hero["id"]])
    assert out["tags"] == [{"id": hero["id"], "name": "Hero"}]

    out = svc.dissociate_items(created["id"], [refs["sword"]["id"]])
    assert [i["name"] for i in out["items"]] == ["Leather Armor"]


def test_delete_character(session, refs):
    svc = CharacterService(session)
    created = svc.create(_payload(refs))
    svc.delete(created["id"])
    assert svc.get_one(created["id"]) is None
    # references released
    RaceService(session).delete(refs["race"]["id"])
