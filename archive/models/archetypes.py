from .base import db, Model, TimestampMixin
from .associations import archetype_skills, archetype_tags


class Archetype(Model, TimestampMixin):
    __tablename__ = "archetypes"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False, index=True)
    description = db.Column(db.String(500))

    skills = db.relationship("Skill", secondary=archetype_skills, order_by="Skill.name")
    tags = db.relationship("Tag", secondary=archetype_tags, order_by="Tag.name")
