from typing import Any

from pydantic import ValidationInfo, field_validator

from archive.config import ATTRIBUTES, MODIFIER_RANGE, RESOURCES
from archive.models import Character, Race
from .base import ResourceService, SkilledMixin, TaggedMixin
from .fields import Payload, is_required, serialize_columns, serialize_refs, to_camel
from .validators import UNSET, validate_int, validate_name, validate_text

MAX_NAME = 50
MAX_DESCRIPTION = 500
MODIFIER_FIELDS = tuple(f"{stat}_modifier" for stat in RESOURCES + ATTRIBUTES)


class RaceFields(Payload):
    name: Any = UNSET
    description: Any = UNSET
    health_modifier: Any = UNSET
    stamina_modifier: Any = UNSET
    mana_modifier: Any = UNSET
    strength_modifier: Any = UNSET
    dexterity_modifier: Any = UNSET
    constitution_modifier: Any = UNSET
    intelligence_modifier: Any = UNSET
    wisdom_modifier: Any = UNSET
    charisma_modifier: Any = UNSET

    @field_validator("name")
    @classmethod
    def _name(cls, v, info: ValidationInfo):
        return validate_name(v, "Race name", max_length=MAX_NAME, required=is_required(info))

    @field_validator("description")
    @classmethod
    def _description(cls, v):
        return validate_text(v, "Race description", max_length=MAX_DESCRIPTION)

    @field_validator(*MODIFIER_FIELDS)
    @classmethod
    def _modifier(cls, v, info: ValidationInfo):
        lo, hi = MODIFIER_RANGE
        return validate_int(v, to_camel(info.field_name), minimum=lo, maximum=hi)


class RaceService(TaggedMixin, SkilledMixin, ResourceService):
    model = Race
    entity = "Race"
    fields_cls = RaceFields
    searchable = ("name", "description")
    sortable = ResourceService.sortable + MODIFIER_FIELDS
    name_max_length = MAX_NAME

    def serialize(self, row):
        out = serialize_columns(row)
        out["skills"] = serialize_refs(row.skills)
        out["tags"] = serialize_refs(row.tags)
        return out

    def validate_create(self, values):
        for field in MODIFIER_FIELDS:
            values.setdefault(field, 0)
        return values

    def reference_counts(self, row):
        return {"characters": self.session.query(Character.id).filter(Character.race_id == row.id).count()}

    def delete_blocked_message(self, row, counts):
        return f'Cannot delete race "{row.name}" as it is being used by {counts["characters"]} characters'
