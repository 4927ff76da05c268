from flask import Blueprint

from archive.models import db
from archive.services import TagService
from .responses import register_crud

bp = Blueprint("tags", __name__, url_prefix="/tags")

register_crud(bp, lambda: TagService(db.session), "Tag")
