import re
from typing import Any

from pydantic import ValidationInfo, field_validator

from archive.models import Tag
from archive.models.associations import (
    archetype_tags,
    character_tags,
    item_tags,
    race_tags,
    skill_tags,
)
from .base import ResourceService, count_links
from .fields import Payload, is_required
from .validators import UNSET, validate_name

MAX_NAME = 50
TAG_NAME_RE = re.compile(r"^[a-zA-Z0-9\s\-_]+$")


class TagFields(Payload):
    name: Any = UNSET

    @field_validator("name")
    @classmethod
    def _name(cls, v, info: ValidationInfo):
        return validate_name(
            v,
            "Tag name",
            max_length=MAX_NAME,
            required=is_required(info),
            pattern=TAG_NAME_RE,
            pattern_hint="can only contain letters, numbers, spaces, hyphens, and underscores",
        )


class TagService(ResourceService):
    model = Tag
    entity = "Tag"
    fields_cls = TagFields
    name_max_length = MAX_NAME

    def reference_counts(self, row):
        return {
            "items": count_links(self.session, item_tags, "tag_id", row.id),
            "characters": count_links(self.session, character_tags, "tag_id", row.id),
            "skills": count_links(self.session, skill_tags, "tag_id", row.id),
            "archetypes": count_links(self.session, archetype_tags, "tag_id", row.id),
            "races": count_links(self.session, race_tags, "tag_id", row.id),
        }
