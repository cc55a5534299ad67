"""JSON routes for the roles domain."""

import logging

from flask import jsonify, request

from errors import register_json_handlers
from modules.roles import services
from utils import request_payload

from . import bp

logger = logging.getLogger(__name__)
register_json_handlers(bp, logger)


@bp.route("", methods=["GET"])
def list_roles():
    result = services.list_roles(
        name=request.args.get("name"),
        include_deleted=request.args.get("includeDeleted"),
        page=request.args.get("page"),
        limit=request.args.get("limit"),
    )
    return jsonify(result)


@bp.route("", methods=["POST"])
def create_role():
    role = services.create_role(request_payload().get("name"))
    return jsonify(role), 201


@bp.route("/<role_id>", methods=["GET"])
def get_role(role_id: str):
    role = services.get_role_by_id(role_id)
    if role is None:
        return jsonify(message="Role not found"), 404
    return jsonify(role)
