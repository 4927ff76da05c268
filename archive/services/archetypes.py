from typing import Any

from pydantic import ValidationInfo, field_validator

from archive.models import Archetype, Character
from .base import ResourceService, SkilledMixin, TaggedMixin
from .fields import Payload, is_required, serialize_columns, serialize_refs
from .validators import UNSET, validate_name, validate_text

MAX_NAME = 50
MAX_DESCRIPTION = 500


class ArchetypeFields(Payload):
    name: Any = UNSET
    description: Any = UNSET

    @field_validator("name")
    @classmethod
    def _name(cls, v, info: ValidationInfo):
        return validate_name(v, "Archetype name", max_length=MAX_NAME, required=is_required(info))

    @field_validator("description")
    @classmethod
    def _description(cls, v):
        return validate_text(v, "Archetype description", max_length=MAX_DESCRIPTION)


class ArchetypeService(TaggedMixin, SkilledMixin, ResourceService):
    model = Archetype
    entity = "Archetype"
    fields_cls = ArchetypeFields
    searchable = ("name", "description")
    name_max_length = MAX_NAME

    def serialize(self, row):
        out = serialize_columns(row)
        out["skills"] = serialize_refs(row.skills)
        out["tags"] = serialize_refs(row.tags)
        return out

    def reference_counts(self, row):
        return {"characters": self.session.query(Character.id).filter(Character.archetype_id == row.id).count()}

    def delete_blocked_message(self, row, counts):
        return f'Cannot delete archetype "{row.name}" as it is being used by {counts["characters"]} characters'
