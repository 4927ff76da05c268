from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional

from archive.config import ATTRIBUTES, EQUIPMENT_SLOTS, RESOURCES

# stat -> item bonus column; stamina and mana have no item bonus
ITEM_BONUS_FIELDS = {
    "health": "bonus_health",
    **{attr: f"bonus_{attr}" for attr in ATTRIBUTES},
}


def _get(src: Any, key: str) -> int:
    if isinstance(src, Mapping):
        return src.get(key, 0) or 0
    return getattr(src, key, 0) or 0


def aggregate_stats(base: Any, race: Any, equipment: Iterable[Optional[Any]] = ()) -> Dict[str, int]:
    """Effective stats: base + race modifier + bonuses of every equipped item.

    ``base``, ``race`` and each equipment entry may be mappings or objects
    (ORM rows). Empty slots are passed as ``None`` and contribute nothing.
    """
    items = [itm for itm in equipment if itm is not None]
    out: Dict[str, int] = {}
    for stat in RESOURCES + ATTRIBUTES:
        total = _get(base, stat) + _get(race, f"{stat}_modifier")
        bonus_field = ITEM_BONUS_FIELDS.get(stat)
        if bonus_field:
            total += sum(_get(itm, bonus_field) for itm in items)
        out[f"aggregate_{stat}"] = total
    return out


def equipped_items(character) -> list:
    return [getattr(character, slot) for slot in EQUIPMENT_SLOTS]


def character_aggregates(character) -> Dict[str, int]:
    return aggregate_stats(character, character.race, equipped_items(character))
