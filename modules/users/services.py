"""
User store accessor.

Every function returns sanitised dicts (``User.to_dict``), never model
instances, so the password hash cannot leak to callers. Lookups that miss
return None; bad input raises one of the ``errors`` classes.
"""

import logging

from flask import current_app
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from errors import ConflictError, NotFoundError, ValidationError
from extensions import db
from modules.roles.services import get_role
from modules.users.models import User
from utils import contains_pattern, paginate, parse_flag, parse_id, unique_violation_field

logger = logging.getLogger(__name__)

# public field name -> column; anything else in an update payload is ignored
UPDATABLE_FIELDS = {
    "fullName": "full_name",
    "avatarUrl": "avatar_url",
    "status": "status",
    "role": "role_id",
    "email": "email",
    "username": "username",
    "password": "password",
}
UNIQUE_FIELDS = ("username", "email")


def _hash_password(password) -> str:
    return generate_password_hash(str(password), method=current_app.config["PASSWORD_HASH_METHOD"])


def _resolve_role_id(role) -> int:
    if parse_id(role) is None:
        raise ValidationError("Invalid role id")
    found = get_role(role)
    if found is None:
        raise NotFoundError("Role not found")
    return found.id


def _commit():
    """Commit the session, translating unique-index violations into ConflictError."""
    try:
        db.session.commit()
    except IntegrityError as err:
        db.session.rollback()
        field = unique_violation_field(err, UNIQUE_FIELDS)
        if field is None:
            raise
        logger.warning("Rejected write: duplicate %s", field)
        raise ConflictError(field) from None


def _visible_users():
    return User.query.filter(User.is_delete.is_(False))


def _get(raw_id):
    user_id = parse_id(raw_id)
    if user_id is None:
        logger.debug("Ignoring malformed user id %r", raw_id)
        return None
    return db.session.get(User, user_id)


def create_user(payload):
    payload = payload or {}
    username = str(payload.get("username") or "").strip()
    email = str(payload.get("email") or "").strip()
    password = payload.get("password")

    if not username or not password or not email:
        raise ValidationError("username, password, and email are required")

    role_id = None
    if payload.get("role"):
        role_id = _resolve_role_id(payload["role"])

    user = User(
        username=username,
        password=_hash_password(password),
        email=email,
        full_name=payload.get("fullName") or "",
        avatar_url=payload.get("avatarUrl") or "",
        role_id=role_id,
        status=parse_flag(payload.get("status")),
    )
    db.session.add(user)
    _commit()

    logger.info("Created user %s (%s)", user.id, user.username)
    return user.to_dict()


def get_all_users(page=None, limit=None, username=None, full_name=None):
    """
    List non-deleted users newest first, optionally filtered by
    case-insensitive substrings of ``username`` and ``full_name``.
    """
    query = _visible_users()
    if username:
        query = query.filter(User.username.ilike(contains_pattern(username), escape="\\"))
    if full_name:
        query = query.filter(User.full_name.ilike(contains_pattern(full_name), escape="\\"))
    query = query.order_by(desc(User.created_at), desc(User.id))
    return paginate(query, page, limit, User.to_dict)


def get_user_by_username(username):
    if not username:
        return None
    user = _visible_users().filter(User.username == username).first()
    return user.to_dict() if user else None


def get_user_by_id(user_id):
    # soft-deleted users stay reachable by id
    user = _get(user_id)
    return user.to_dict() if user else None


def update_user(user_id, updates=None):
    """Apply the allow-listed subset of ``updates``; None when no user matches."""
    if parse_id(user_id) is None:
        return None
    updates = updates or {}

    to_set = {}
    for key, column in UPDATABLE_FIELDS.items():
        if key in updates:
            to_set[column] = updates[key]

    if "role_id" in to_set:
        to_set["role_id"] = _resolve_role_id(to_set["role_id"]) if to_set["role_id"] else None

    if "password" in to_set:
        if to_set["password"]:
            to_set["password"] = _hash_password(to_set["password"])
        else:
            del to_set["password"]

    for column in ("username", "email"):
        if column in to_set:
            to_set[column] = str(to_set[column] or "").strip()
            if not to_set[column]:
                raise ValidationError(f"{column} cannot be empty")

    for column in ("full_name", "avatar_url"):
        if column in to_set and to_set[column] is None:
            to_set[column] = ""

    if "status" in to_set:
        to_set["status"] = parse_flag(to_set["status"])

    user = _get(user_id)
    if user is None:
        return None

    for column, value in to_set.items():
        setattr(user, column, value)
    _commit()

    logger.info("Updated user %s fields=%s", user.id, sorted(to_set))
    return user.to_dict()


def soft_delete_user(user_id):
    user = _get(user_id)
    if user is None:
        return None

    user.is_delete = True
    db.session.commit()

    logger.info("Soft-deleted user %s", user.id)
    return user.to_dict()


def verify_user(email, username):
    """
    Activate the non-deleted user matching both ``email`` and ``username``.

    A pair match only; no secret is involved.
    """
    if not email or not username:
        return None

    user = _visible_users().filter(User.email == email, User.username == username).first()
    if user is None:
        logger.info("Verification found no user for %r / %r", email, username)
        return None

    user.status = True
    db.session.commit()

    logger.info("Verified user %s", user.id)
    return user.to_dict()
