from .base import db, Model, TimestampMixin
from .associations import race_skills, race_tags


class Race(Model, TimestampMixin):
    __tablename__ = "races"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False, index=True)
    description = db.Column(db.String(500))

    # additive modifiers applied to a character's base stats, each in [-10, 10]
    health_modifier = db.Column(db.Integer, nullable=False, default=0)
    stamina_modifier = db.Column(db.Integer, nullable=False, default=0)
    mana_modifier = db.Column(db.Integer, nullable=False, default=0)
    strength_modifier = db.Column(db.Integer, nullable=False, default=0)
    dexterity_modifier = db.Column(db.Integer, nullable=False, default=0)
    constitution_modifier = db.Column(db.Integer, nullable=False, default=0)
    intelligence_modifier = db.Column(db.Integer, nullable=False, default=0)
    wisdom_modifier = db.Column(db.Integer, nullable=False, default=0)
    charisma_modifier = db.Column(db.Integer, nullable=False, default=0)

    skills = db.relationship("Skill", secondary=race_skills, order_by="Skill.name")
    tags = db.relationship("Tag", secondary=race_tags, order_by="Tag.name")
