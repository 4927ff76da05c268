"""HTTP layer: one blueprint per resource plus app-wide error mapping."""
from flask import jsonify
from werkzeug.exceptions import HTTPException

from archive.errors import ServiceError
from .archetypes import bp as archetypes_bp
from .characters import bp as characters_bp
from .images import bp as images_bp
from .items import bp as items_bp
from .races import bp as races_bp
from .skills import bp as skills_bp
from .tags import bp as tags_bp
from .users import bp as users_bp

BLUEPRINTS = (
    characters_bp,
    items_bp,
    races_bp,
    archetypes_bp,
    skills_bp,
    tags_bp,
    users_bp,
    images_bp,
)


def register_blueprints(app):
    for bp in BLUEPRINTS:
        app.register_blueprint(bp)


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(err):
        return jsonify(error=err.message), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify(error=err.description), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        app.logger.exception("unhandled error: %s", err)
        return jsonify(error="Internal server error"), 500
