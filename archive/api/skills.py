from flask import Blueprint

from archive.models import db
from archive.services import SkillService
from .responses import register_crud, register_links

bp = Blueprint("skills", __name__, url_prefix="/skills")


def _service():
    return SkillService(db.session)


register_crud(bp, _service, "Skill")
register_links(bp, _service, "tags", "tagIds", "Tags")
