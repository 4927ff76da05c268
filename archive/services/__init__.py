"""Resource services. Each is constructed with the session it should use."""
from .archetypes import ArchetypeService
from .characters import CharacterService
from .images import ImageService
from .items import ItemService
from .query import ListParams
from .races import RaceService
from .skills import SkillService
from .tags import TagService
from .users import UserService

__all__ = [
    "ArchetypeService",
    "CharacterService",
    "ImageService",
    "ItemService",
    "ListParams",
    "RaceService",
    "SkillService",
    "TagService",
    "UserService",
]
