from flask import Blueprint, current_app, jsonify, request

from archive.models import db
from archive.services import ImageService, ListParams, UserService
from .responses import json_body, ok, register_crud

bp = Blueprint("users", __name__, url_prefix="/users")


def _service():
    return UserService(db.session, current_app.config["PASSWORD_HASH_METHOD"])


register_crud(bp, _service, "User")


@bp.post("/verify-password")
def verify_password():
    body = json_body()
    user = _service().verify_password(body.get("email"), body.get("password"))
    if user is None:
        return jsonify(error="Invalid email or password"), 401
    return ok(user, message="Password verified")


@bp.get("/<user_id>/images")
def user_images(user_id):
    result = ImageService(db.session).get_user_images(user_id, ListParams.from_args(request.args))
    return ok(result["data"], pagination=result["pagination"])
