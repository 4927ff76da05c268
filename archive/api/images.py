from flask import Blueprint

from archive.models import db
from archive.services import ImageService
from .responses import register_crud

bp = Blueprint("images", __name__, url_prefix="/images")

register_crud(bp, lambda: ImageService(db.session), "Image")
