"""Item service: category flags, stat bounds and type consistency rules."""
from typing import Any

from pydantic import ValidationInfo, field_validator

from archive.config import (
    ATTRIBUTES,
    DURABILITY_RANGE,
    EQUIPMENT_SLOTS,
    ITEM_FLAGS,
    MAX_CONSUMABLE_DURABILITY,
    MAX_ITEM_STAT,
    MIN_QUEST_ITEM_DURABILITY,
    RARITIES,
)
from archive.errors import ValidationError
from archive.models import Character, Item
from archive.models.associations import character_items
from .base import ResourceService, TaggedMixin, count_links
from .fields import Payload, is_required, serialize_columns, serialize_refs, to_camel
from .validators import UNSET, validate_bool, validate_choice, validate_int, validate_name, validate_text

MAX_NAME = 100
MAX_DESCRIPTION = 500

REQUIRED_FIELDS = tuple(f"required_{a}" for a in ATTRIBUTES)
BONUS_FIELDS = tuple(f"bonus_{a}" for a in ATTRIBUTES) + ("bonus_health",)

DEFAULTS = {
    "rarity": "common",
    "attack": 0,
    "defense": 0,
    "durability": 100,
    "weight": 1,
    **{flag: False for flag in ITEM_FLAGS},
    **{f: 0 for f in REQUIRED_FIELDS + BONUS_FIELDS},
}


class ItemFields(Payload):
    name: Any = UNSET
    description: Any = UNSET
    rarity: Any = UNSET
    is_weapon: Any = UNSET
    is_shield: Any = UNSET
    is_armor: Any = UNSET
    is_accessory: Any = UNSET
    is_consumable: Any = UNSET
    is_quest_item: Any = UNSET
    is_crafting_material: Any = UNSET
    is_miscellaneous: Any = UNSET
    attack: Any = UNSET
    defense: Any = UNSET
    required_strength: Any = UNSET
    required_dexterity: Any = UNSET
    required_constitution: Any = UNSET
    required_intelligence: Any = UNSET
    required_wisdom: Any = UNSET
    required_charisma: Any = UNSET
    bonus_strength: Any = UNSET
    bonus_dexterity: Any = UNSET
    bonus_constitution: Any = UNSET
    bonus_intelligence: Any = UNSET
    bonus_wisdom: Any = UNSET
    bonus_charisma: Any = UNSET
    bonus_health: Any = UNSET
    durability: Any = UNSET
    weight: Any = UNSET

    @field_validator("name")
    @classmethod
    def _name(cls, v, info: ValidationInfo):
        return validate_name(v, "Item name", max_length=MAX_NAME, required=is_required(info))

    @field_validator("description")
    @classmethod
    def _description(cls, v):
        return validate_text(v, "Item description", max_length=MAX_DESCRIPTION)

    @field_validator("rarity")
    @classmethod
    def _rarity(cls, v):
        return validate_choice(v, "Item rarity", RARITIES)

    @field_validator(*ITEM_FLAGS)
    @classmethod
    def _flag(cls, v, info: ValidationInfo):
        return validate_bool(v, to_camel(info.field_name))

    @field_validator("attack", "defense")
    @classmethod
    def _combat(cls, v, info: ValidationInfo):
        return validate_int(v, info.field_name, minimum=0)

    @field_validator(*REQUIRED_FIELDS, *BONUS_FIELDS)
    @classmethod
    def _stat(cls, v, info: ValidationInfo):
        return validate_int(v, to_camel(info.field_name), minimum=0, maximum=MAX_ITEM_STAT)

    @field_validator("durability")
    @classmethod
    def _durability(cls, v):
        lo, hi = DURABILITY_RANGE
        return validate_int(v, "Durability", minimum=lo, maximum=hi)

    @field_validator("weight")
    @classmethod
    def _weight(cls, v):
        return validate_int(v, "Weight", minimum=1)


def check_item_type(row) -> None:
    """Type consistency of a complete item (all columns set)."""
    if not any(getattr(row, flag) for flag in ITEM_FLAGS):
        raise ValidationError("Item must have at least one type flag set to true")
    if row.is_weapon and row.attack <= 0:
        raise ValidationError("Weapons should have an attack value greater than 0")
    if (row.is_armor or row.is_shield) and row.defense <= 0:
        raise ValidationError("Armor and shields should have a defense value greater than 0")
    if not row.is_weapon and row.attack > 0:
        raise ValidationError("Non-weapon items should not have attack values")
    if row.is_consumable and row.durability > MAX_CONSUMABLE_DURABILITY:
        raise ValidationError(f"Consumable items should have lower durability (max {MAX_CONSUMABLE_DURABILITY})")
    if row.is_quest_item and row.durability < MIN_QUEST_ITEM_DURABILITY:
        raise ValidationError(f"Quest items should have high durability (min {MIN_QUEST_ITEM_DURABILITY})")


class ItemService(TaggedMixin, ResourceService):
    model = Item
    entity = "Item"
    fields_cls = ItemFields
    searchable = ("name", "description", "rarity")
    sortable = ResourceService.sortable + ("rarity", "attack", "defense", "durability", "weight")
    name_max_length = MAX_NAME

    def serialize(self, row):
        out = serialize_columns(row)
        out["tags"] = serialize_refs(row.tags)
        return out

    def validate_create(self, values):
        return {**DEFAULTS, **values}

    def check_row(self, row) -> None:
        check_item_type(row)

    def reference_counts(self, row):
        counts = {
            slot.replace("_", " "): self.session.query(Character.id)
            .filter(getattr(Character, f"{slot}_id") == row.id)
            .count()
            for slot in EQUIPMENT_SLOTS
        }
        counts["inventory"] = count_links(self.session, character_items, "item_id", row.id)
        return counts

    def delete_blocked_message(self, row, counts):
        details = ", ".join(f"{k}: {v}" for k, v in counts.items() if v)
        return f'Cannot delete item "{row.name}" as it is being used by characters ({details})'
