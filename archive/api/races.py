from flask import Blueprint

from archive.models import db
from archive.services import RaceService
from .responses import register_crud, register_links

bp = Blueprint("races", __name__, url_prefix="/races")


def _service():
    return RaceService(db.session)


register_crud(bp, _service, "Race")
register_links(bp, _service, "tags", "tagIds", "Tags")
register_links(bp, _service, "skills", "skillIds", "Skills")
