from archive.services.stats import aggregate_stats

BASE = {
    "health": 100, "stamina": 50, "mana": 30,
    "strength": 10, "dexterity": 12, "constitution": 14,
    "intelligence": 8, "wisdom": 9, "charisma": 11,
}


def test_no_race_modifiers_and_no_equipment_returns_base():
    out = aggregate_stats(BASE, {}, [])
    assert out["aggregate_health"] == 100
    assert out["aggregate_strength"] == 10
    assert out["aggregate_charisma"] == 11
    assert len(out) == 9


def test_race_modifiers_apply_to_every_stat():
    race = {"health_modifier": -5, "stamina_modifier": 10, "mana_modifier": -10, "strength_modifier": 3}
    out = aggregate_stats(BASE, race)
    assert out["aggregate_health"] == 95
    assert out["aggregate_stamina"] == 60
    assert out["aggregate_mana"] == 20
    assert out["aggregate_strength"] == 13
    assert out["aggregate_dexterity"] == 12


def test_item_bonuses_sum_and_empty_slots_are_skipped():
    sword = {"bonus_strength": 3, "bonus_health": 0}
    armor = {"bonus_health": 10, "bonus_dexterity": 2, "bonus_constitution": 1}
    ring = {"bonus_intelligence": 5, "bonus_wisdom": 3}
    out = aggregate_stats(BASE, {"strength_modifier": 2}, [sword, None, None, armor, ring, None, None])
    assert out["aggregate_health"] == 110
    assert out["aggregate_strength"] == 15
    assert out["aggregate_dexterity"] == 14
    assert out["aggregate_constitution"] == 15
    assert out["aggregate_intelligence"] == 13
    assert out["aggregate_wisdom"] == 12


def test_stamina_and_mana_take_no_item_bonus():
    item = {"bonus_stamina": 50, "bonus_mana": 50, "bonus_health": 1}
    out = aggregate_stats(BASE, {}, [item])
    assert out["aggregate_stamina"] == 50
    assert out["aggregate_mana"] == 30
    assert out["aggregate_health"] == 101


def test_accepts_attribute_objects():
    class Row:
        def __init__(self, **kw):
            self.__dict__.update(kw)

    out = aggregate_stats(Row(**BASE), Row(charisma_modifier=2), [Row(bonus_charisma=1)])
    assert out["aggregate_charisma"] == 14
