from flask import Blueprint

from archive.models import db
from archive.services import CharacterService
from .responses import register_crud, register_links

bp = Blueprint("characters", __name__, url_prefix="/characters")


def _service():
    return CharacterService(db.session)


register_crud(bp, _service, "Character")
register_links(bp, _service, "tags", "tagIds", "Tags")
# inventory
register_links(bp, _service, "items", "itemIds", "Items")
