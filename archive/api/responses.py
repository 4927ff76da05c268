"""Envelope helpers and the CRUD route set shared by every resource blueprint."""
from flask import jsonify, request

from archive.errors import ValidationError
from archive.services import ListParams


def ok(data=None, *, status=200, message=None, pagination=None):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if pagination is not None:
        body["pagination"] = pagination
    if message:
        body["message"] = message
    return jsonify(body), status


def not_found(entity: str):
    return jsonify(error=f"{entity} not found"), 404


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_crud(bp, make_service, entity: str):
    """List, read, create, update and delete routes for one resource."""

    @bp.get("", endpoint="list")
    def list_rows():
        result = make_service().get_many(ListParams.from_args(request.args))
        return ok(result["data"], pagination=result["pagination"])

    @bp.get("/<entity_id>", endpoint="get")
    def get_row(entity_id):
        row = make_service().get_one(entity_id)
        if row is None:
            return not_found(entity)
        return ok(row)

    @bp.post("", endpoint="create")
    def create_row():
        row = make_service().create(json_body())
        return ok(row, status=201, message=f"{entity} created successfully")

    @bp.route("/<entity_id>", methods=["PUT", "PATCH"], endpoint="update")
    def update_row(entity_id):
        # path id wins over any id in the body
        row = make_service().update({**json_body(), "id": entity_id})
        if row is None:
            return not_found(entity)
        return ok(row, message=f"{entity} updated successfully")

    @bp.delete("/<entity_id>", endpoint="delete")
    def delete_row(entity_id):
        make_service().delete(entity_id)
        return ok(message=f"{entity} deleted successfully")


def register_links(bp, make_service, relation: str, body_key: str, label: str):
    """``POST|DELETE /<id>/<relation>`` with ``{"<body_key>": [ids]}``."""

    @bp.post(f"/<entity_id>/{relation}", endpoint=f"add_{relation}")
    def add_links(entity_id):
        svc = make_service()
        row = getattr(svc, f"associate_{relation}")(entity_id, json_body().get(body_key))
        return ok(row, message=f"{label} associated successfully")

    @bp.delete(f"/<entity_id>/{relation}", endpoint=f"remove_{relation}")
    def remove_links(entity_id):
        svc = make_service()
        row = getattr(svc, f"dissociate_{relation}")(entity_id, json_body().get(body_key))
        return ok(row, message=f"{label} dissociated successfully")
