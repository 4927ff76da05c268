"""Character service.

Every character read carries the derived ``aggregate*`` stats computed from
its base stats, race modifiers and equipped items; they are never stored.
"""
from typing import Any

from pydantic import ValidationInfo, field_validator

from archive.config import ATTRIBUTES, EQUIPMENT_SLOTS, RESOURCES
from archive.errors import BusinessLogicError
from archive.models import Archetype, Character, Item, Race, User
from .base import ResourceService, TaggedMixin
from .fields import Payload, is_required, serialize_columns, serialize_refs, to_camel
from .stats import character_aggregates
from .validators import (
    UNSET,
    validate_attribute,
    validate_bool,
    validate_name,
    validate_optional_id,
    validate_positive_id,
    validate_resource,
    validate_text,
)

SLOT_FIELDS = tuple(f"{slot}_id" for slot in EQUIPMENT_SLOTS)
TEXT_LIMITS = {"surname": 50, "nickname": 30, "description": 1000, "avatar_path": 255}


class CharacterFields(Payload):
    name: Any = UNSET
    surname: Any = UNSET
    nickname: Any = UNSET
    description: Any = UNSET
    avatar_path: Any = UNSET
    health: Any = UNSET
    stamina: Any = UNSET
    mana: Any = UNSET
    strength: Any = UNSET
    dexterity: Any = UNSET
    constitution: Any = UNSET
    intelligence: Any = UNSET
    wisdom: Any = UNSET
    charisma: Any = UNSET
    is_public: Any = UNSET
    race_id: Any = UNSET
    archetype_id: Any = UNSET
    user_id: Any = UNSET
    primary_weapon_id: Any = UNSET
    secondary_weapon_id: Any = UNSET
    shield_id: Any = UNSET
    armor_id: Any = UNSET
    first_ring_id: Any = UNSET
    second_ring_id: Any = UNSET
    amulet_id: Any = UNSET

    @field_validator("name")
    @classmethod
    def _name(cls, v, info: ValidationInfo):
        return validate_name(v, "Character name", max_length=50, required=is_required(info))

    @field_validator("surname", "nickname", "description", "avatar_path")
    @classmethod
    def _text(cls, v, info: ValidationInfo):
        label = f"Character {to_camel(info.field_name)}"
        return validate_text(v, label, max_length=TEXT_LIMITS[info.field_name])

    @field_validator(*RESOURCES)
    @classmethod
    def _resource(cls, v, info: ValidationInfo):
        return validate_resource(v, f"Character {info.field_name}", required=is_required(info))

    @field_validator(*ATTRIBUTES)
    @classmethod
    def _attribute(cls, v, info: ValidationInfo):
        return validate_attribute(v, f"Character {info.field_name}", required=is_required(info))

    @field_validator("is_public")
    @classmethod
    def _is_public(cls, v):
        return validate_bool(v, "Character isPublic")

    @field_validator("race_id", "archetype_id", "user_id")
    @classmethod
    def _owner(cls, v, info: ValidationInfo):
        label = info.field_name.split("_")[0].title() + " ID"
        return validate_positive_id(v, label, required=is_required(info))

    @field_validator(*SLOT_FIELDS)
    @classmethod
    def _slot(cls, v, info: ValidationInfo):
        label = " ".join(w.title() for w in info.field_name.split("_")[:-1]) + " ID"
        return validate_optional_id(v, label)


def _ref(row):
    return {"id": row.id, "name": row.name} if row is not None else None


class CharacterService(TaggedMixin, ResourceService):
    model = Character
    entity = "Character"
    fields_cls = CharacterFields
    searchable = ("name", "surname", "nickname", "description")
    sortable = ResourceService.sortable + ("surname", "nickname") + RESOURCES + ATTRIBUTES
    unique_scope = ("user_id",)
    name_max_length = 50
    conflict_template = 'Character with name "{value}" already exists for this user'

    def serialize(self, row):
        out = serialize_columns(row)
        out.update({to_camel(k): v for k, v in character_aggregates(row).items()})
        out["race"] = _ref(row.race)
        out["archetype"] = _ref(row.archetype)
        out["equipment"] = {to_camel(slot): _ref(getattr(row, slot)) for slot in EQUIPMENT_SLOTS}
        out["items"] = serialize_refs(row.items)
        out["tags"] = serialize_refs(row.tags)
        return out

    def validate_create(self, values):
        values.setdefault("is_public", False)
        return values

    def check_references(self, values, row=None):
        if "user_id" in values:
            user = self._require(User, "User", values["user_id"])
            if not user.is_active:
                verb = "create" if row is None else "assign"
                raise BusinessLogicError(f"Cannot {verb} character for inactive user")
        if "race_id" in values:
            self._require(Race, "Race", values["race_id"])
        if "archetype_id" in values:
            self._require(Archetype, "Archetype", values["archetype_id"])
        for field in SLOT_FIELDS:
            item_id = values.get(field)
            if item_id is not None:
                self._require(Item, "Item", item_id)

    def associate_items(self, character_id, item_ids):
        """Add items to the character's inventory."""
        return self._change_links(character_id, item_ids, "items", Item, "Item", add=True)

    def dissociate_items(self, character_id, item_ids):
        return self._change_links(character_id, item_ids, "items", Item, "Item", add=False)
