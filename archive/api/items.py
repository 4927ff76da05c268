from flask import Blueprint

from archive.models import db
from archive.services import ItemService
from .responses import register_crud, register_links

bp = Blueprint("items", __name__, url_prefix="/items")


def _service():
    return ItemService(db.session)


register_crud(bp, _service, "Item")
register_links(bp, _service, "tags", "tagIds", "Tags")
