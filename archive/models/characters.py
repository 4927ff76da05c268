from .base import db, Model, TimestampMixin
from .associations import character_items, character_tags


def _slot(column: str):
    return db.relationship("Item", foreign_keys=[column], lazy="joined")


class Character(Model, TimestampMixin):
    __tablename__ = "characters"
    __table_args__ = (db.UniqueConstraint("user_id", "name", name="uq_characters_user_name"),)

    id = db.Column(db.Integer, primary_key=True)

    # identity
    name = db.Column(db.String(50), nullable=False, index=True)
    surname = db.Column(db.String(50))
    nickname = db.Column(db.String(30))
    description = db.Column(db.String(1000))
    avatar_path = db.Column(db.String(255))

    # resource pools, each >= 1
    health = db.Column(db.Integer, nullable=False)
    stamina = db.Column(db.Integer, nullable=False)
    mana = db.Column(db.Integer, nullable=False)

    # base attributes, each in [1, 20]
    strength = db.Column(db.Integer, nullable=False)
    dexterity = db.Column(db.Integer, nullable=False)
    constitution = db.Column(db.Integer, nullable=False)
    intelligence = db.Column(db.Integer, nullable=False)
    wisdom = db.Column(db.Integer, nullable=False)
    charisma = db.Column(db.Integer, nullable=False)

    is_public = db.Column(db.Boolean, nullable=False, default=False)

    race_id = db.Column(db.Integer, db.ForeignKey("races.id"), nullable=False, index=True)
    archetype_id = db.Column(db.Integer, db.ForeignKey("archetypes.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    # equipment slots
    primary_weapon_id = db.Column(db.Integer, db.ForeignKey("items.id", ondelete="SET NULL"))
    secondary_weapon_id = db.Column(db.Integer, db.ForeignKey("items.id", ondelete="SET NULL"))
    shield_id = db.Column(db.Integer, db.ForeignKey("items.id", ondelete="SET NULL"))
    armor_id = db.Column(db.Integer, db.ForeignKey("items.id", ondelete="SET NULL"))
    first_ring_id = db.Column(db.Integer, db.ForeignKey("items.id", ondelete="SET NULL"))
    second_ring_id = db.Column(db.Integer, db.ForeignKey("items.id", ondelete="SET NULL"))
    amulet_id = db.Column(db.Integer, db.ForeignKey("items.id", ondelete="SET NULL"))

    race = db.relationship("Race", lazy="joined")
    archetype = db.relationship("Archetype")
    user = db.relationship("User", back_populates="characters")

    primary_weapon = _slot(primary_weapon_id)
    secondary_weapon = _slot(secondary_weapon_id)
    shield = _slot(shield_id)
    armor = _slot(armor_id)
    first_ring = _slot(first_ring_id)
    second_ring = _slot(second_ring_id)
    amulet = _slot(amulet_id)

    items = db.relationship("Item", secondary=character_items, order_by="Item.name")
    tags = db.relationship("Tag", secondary=character_tags, order_by="Tag.name")
