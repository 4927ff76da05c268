from typing import Any

from pydantic import ValidationInfo, field_validator

from archive.models import Skill
from archive.models.associations import archetype_skills, race_skills
from .base import ResourceService, TaggedMixin, count_links
from .fields import Payload, is_required, serialize_columns, serialize_refs
from .validators import UNSET, validate_name, validate_text

MAX_NAME = 100
MAX_DESCRIPTION = 500


class SkillFields(Payload):
    name: Any = UNSET
    description: Any = UNSET

    @field_validator("name")
    @classmethod
    def _name(cls, v, info: ValidationInfo):
        return validate_name(v, "Skill name", max_length=MAX_NAME, required=is_required(info))

    @field_validator("description")
    @classmethod
    def _description(cls, v):
        return validate_text(v, "Skill description", max_length=MAX_DESCRIPTION)


class SkillService(TaggedMixin, ResourceService):
    model = Skill
    entity = "Skill"
    fields_cls = SkillFields
    searchable = ("name", "description")
    name_max_length = MAX_NAME

    def serialize(self, row):
        out = serialize_columns(row)
        out["tags"] = serialize_refs(row.tags)
        return out

    def reference_counts(self, row):
        return {
            "archetypes": count_links(self.session, archetype_skills, "skill_id", row.id),
            "races": count_links(self.session, race_skills, "skill_id", row.id),
        }
