"""JSON routes for the users domain."""

import logging

from flask import jsonify, request

from errors import register_json_handlers
from modules.users import services
from utils import request_payload

from . import bp

logger = logging.getLogger(__name__)
register_json_handlers(bp, logger)


def _not_found():
    return jsonify(message="User not found"), 404


@bp.route("", methods=["POST"])
def create_user():
    user = services.create_user(request_payload())
    return jsonify(user), 201


@bp.route("", methods=["GET"])
def list_users():
    """All users, or one page of them when ``page``/``limit`` are given."""
    result = services.get_all_users(
        page=request.args.get("page"),
        limit=request.args.get("limit"),
        username=request.args.get("username"),
        full_name=request.args.get("fullName"),
    )
    return jsonify(result)


@bp.route("/by-username/<username>", methods=["GET"])
def get_user_by_username(username: str):
    user = services.get_user_by_username(username)
    if user is None:
        return _not_found()
    return jsonify(user)


@bp.route("/<user_id>", methods=["GET"])
def get_user(user_id: str):
    user = services.get_user_by_id(user_id)
    if user is None:
        return _not_found()
    return jsonify(user)


@bp.route("/<user_id>", methods=["PUT"])
def update_user(user_id: str):
    user = services.update_user(user_id, request_payload())
    if user is None:
        return _not_found()
    return jsonify(user)


@bp.route("/<user_id>", methods=["DELETE"])
def delete_user(user_id: str):
    user = services.soft_delete_user(user_id)
    if user is None:
        return _not_found()
    return jsonify(message="User soft-deleted", user=user)


# /activate is the name the frontend uses
@bp.route("/verify", methods=["POST"])
@bp.route("/activate", methods=["POST"])
def verify_user():
    payload = request_payload()
    email = payload.get("email")
    username = payload.get("username") or payload.get("userName")
    if not email or not username:
        return jsonify(message="email and username are required"), 400

    user = services.verify_user(email, username)
    if user is None:
        return jsonify(message="Invalid email or username"), 404
    return jsonify(message="User verified", user=user)
