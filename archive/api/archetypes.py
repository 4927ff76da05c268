from flask import Blueprint

from archive.models import db
from archive.services import ArchetypeService
from .responses import register_crud, register_links

bp = Blueprint("archetypes", __name__, url_prefix="/archetypes")


def _service():
    return ArchetypeService(db.session)


register_crud(bp, _service, "Archetype")
register_links(bp, _service, "tags", "tagIds", "Tags")
register_links(bp, _service, "skills", "skillIds", "Skills")
