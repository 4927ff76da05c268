from .base import db, Model, metadata

# Import model modules so tables register with metadata
from .users import User                      # noqa: F401
from .tags import Tag                        # noqa: F401
from .skills import Skill                    # noqa: F401
from .races import Race                      # noqa: F401
from .archetypes import Archetype            # noqa: F401
from .items import Item                      # noqa: F401
from .characters import Character            # noqa: F401
from .images import Image                    # noqa: F401

__all__ = [
    "db", "Model", "metadata",
    "User", "Tag", "Skill", "Race", "Archetype", "Item", "Character", "Image",
]
