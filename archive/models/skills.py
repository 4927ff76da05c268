from .base import db, Model, TimestampMixin
from .associations import skill_tags


class Skill(Model, TimestampMixin):
    __tablename__ = "skills"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    description = db.Column(db.String(500))

    tags = db.relationship("Tag", secondary=skill_tags, order_by="Tag.name")
