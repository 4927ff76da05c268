from .base import db, Model, TimestampMixin
from .associations import item_tags


class Item(Model, TimestampMixin):
    __tablename__ = "items"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    description = db.Column(db.String(500))
    rarity = db.Column(db.String(16), nullable=False, default="common")  # common..legendary

    # category flags, not mutually exclusive
    is_weapon = db.Column(db.Boolean, nullable=False, default=False)
    is_shield = db.Column(db.Boolean, nullable=False, default=False)
    is_armor = db.Column(db.Boolean, nullable=False, default=False)
    is_accessory = db.Column(db.Boolean, nullable=False, default=False)
    is_consumable = db.Column(db.Boolean, nullable=False, default=False)
    is_quest_item = db.Column(db.Boolean, nullable=False, default=False)
    is_crafting_material = db.Column(db.Boolean, nullable=False, default=False)
    is_miscellaneous = db.Column(db.Boolean, nullable=False, default=False)

    attack = db.Column(db.Integer, nullable=False, default=0)
    defense = db.Column(db.Integer, nullable=False, default=0)

    # equip thresholds; stored, not enforced
    required_strength = db.Column(db.Integer, nullable=False, default=0)
    required_dexterity = db.Column(db.Integer, nullable=False, default=0)
    required_constitution = db.Column(db.Integer, nullable=False, default=0)
    required_intelligence = db.Column(db.Integer, nullable=False, default=0)
    required_wisdom = db.Column(db.Integer, nullable=False, default=0)
    required_charisma = db.Column(db.Integer, nullable=False, default=0)

    bonus_strength = db.Column(db.Integer, nullable=False, default=0)
    bonus_dexterity = db.Column(db.Integer, nullable=False, default=0)
    bonus_constitution = db.Column(db.Integer, nullable=False, default=0)
    bonus_intelligence = db.Column(db.Integer, nullable=False, default=0)
    bonus_wisdom = db.Column(db.Integer, nullable=False, default=0)
    bonus_charisma = db.Column(db.Integer, nullable=False, default=0)
    bonus_health = db.Column(db.Integer, nullable=False, default=0)

    durability = db.Column(db.Integer, nullable=False, default=100)
    weight = db.Column(db.Integer, nullable=False, default=1)

    tags = db.relationship("Tag", secondary=item_tags, order_by="Tag.name")
