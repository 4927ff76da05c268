"""Many-to-many link tables.

Rows here are owned by the relationships declared on the models; deleting
either side removes the matching link rows.
"""
from .base import db


def _link_table(name: str, left: str, right: str) -> db.Table:
    return db.Table(
        name,
        db.Column(f"{left}_id", db.Integer, db.ForeignKey(f"{left}s.id", ondelete="CASCADE"), primary_key=True),
        db.Column(f"{right}_id", db.Integer, db.ForeignKey(f"{right}s.id", ondelete="CASCADE"), primary_key=True),
    )


skill_tags = _link_table("skill_tags", "skill", "tag")
item_tags = _link_table("item_tags", "item", "tag")
race_tags = _link_table("race_tags", "race", "tag")
archetype_tags = _link_table("archetype_tags", "archetype", "tag")
character_tags = _link_table("character_tags", "character", "tag")

race_skills = _link_table("race_skills", "race", "skill")
archetype_skills = _link_table("archetype_skills", "archetype", "skill")

# character inventory (carried, not equipped)
character_items = _link_table("character_items", "character", "item")
