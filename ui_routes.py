# ui_routes.py: server-rendered pages for user administration
import logging

from flask import Blueprint, redirect, render_template, request, url_for
from werkzeug.exceptions import HTTPException

from errors import ServiceError
from modules.roles import services as role_services
from modules.users import services as user_services

logger = logging.getLogger(__name__)

ui = Blueprint("ui", __name__)

# enough to fill the role <select> in one go
ROLE_CHOICES_LIMIT = 1000


def _role_choices():
    return role_services.list_roles(limit=ROLE_CHOICES_LIMIT)["items"]


@ui.errorhandler(Exception)
def render_error(err):
    """Every failure in the UI ends up on the shared error page."""
    if isinstance(err, HTTPException):
        return render_template("error.html", message=err.description, status=err.code), err.code
    if isinstance(err, ServiceError):
        return render_template("error.html", message=err.message, status=err.status), err.status
    logger.exception("Unhandled error in %s", request.path)
    return render_template("error.html", message="Internal server error", status=500), 500


@ui.route("/")
def home():
    return redirect(url_for("ui.list_users"))


@ui.route("/users/ui/", strict_slashes=False)
def list_users():
    username = request.args.get("username", "")
    full_name = request.args.get("fullName", "")
    users_page = user_services.get_all_users(
        username=username,
        full_name=full_name,
        page=request.args.get("page"),
        limit=request.args.get("limit"),
    )
    return render_template(
        "users/list.html",
        users_page=users_page,
        filters={"username": username, "fullName": full_name},
        title="Users",
    )


@ui.route("/users/ui/new")
def new_user():
    return render_template("users/form.html", title="Create User", user=None, roles=_role_choices())


@ui.route("/users/ui/", methods=["POST"], strict_slashes=False)
def create_user():
    user_services.create_user(request.form.to_dict())
    return redirect(url_for("ui.list_users"))


@ui.route("/users/ui/<user_id>/edit")
def edit_user(user_id: str):
    user = user_services.get_user_by_id(user_id)
    if user is None:
        return render_template("error.html", message="User not found", status=404), 404
    return render_template("users/form.html", title="Edit User", user=user, roles=_role_choices())


@ui.route("/users/ui/<user_id>", methods=["POST"])
def update_user(user_id: str):
    user_services.update_user(user_id, request.form.to_dict())
    return redirect(url_for("ui.list_users"))


@ui.route("/users/ui/<user_id>/delete", methods=["POST"])
def delete_user(user_id: str):
    user_services.soft_delete_user(user_id)
    return redirect(url_for("ui.list_users"))


@ui.route("/users/ui/verify", methods=["POST"])
def verify_user():
    user_services.verify_user(request.form.get("email"), request.form.get("username"))
    return redirect(url_for("ui.list_users"))
