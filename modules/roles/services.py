"""Role store accessor: queries and creation of role records."""

import logging

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError

from errors import ConflictError, ValidationError
from extensions import db
from modules.roles.models import Role
from utils import contains_pattern, paginate, parse_flag, parse_id, unique_violation_field

logger = logging.getLogger(__name__)


def list_roles(name=None, include_deleted=None, page=None, limit=None):
    """
    List roles newest first.

    Soft-deleted roles are hidden unless ``include_deleted`` is an explicit
    true flag. Returns a plain list, or a page envelope when ``page`` or
    ``limit`` is supplied.
    """
    query = Role.query
    if not parse_flag(include_deleted):
        query = query.filter(Role.is_delete.is_(False))
    if name:
        query = query.filter(Role.name.ilike(contains_pattern(name), escape="\\"))
    query = query.order_by(desc(Role.created_at), desc(Role.id))
    return paginate(query, page, limit, Role.to_dict)


def get_role(role_id):
    """Model lookup used when validating references; None for bad or unknown ids."""
    role_id = parse_id(role_id)
    if role_id is None:
        return None
    return db.session.get(Role, role_id)


def get_role_by_id(role_id):
    role = get_role(role_id)
    return role.to_dict() if role else None


def get_role_by_name(name):
    """Exact, case-sensitive lookup among non-deleted roles."""
    if not name:
        return None
    role = Role.query.filter(Role.name == name, Role.is_delete.is_(False)).first()
    return role.to_dict() if role else None


def create_role(name):
    name = str(name or "").strip()
    if not name:
        raise ValidationError("name is required")

    role = Role(name=name)
    db.session.add(role)
    try:
        db.session.commit()
    except IntegrityError as err:
        db.session.rollback()
        if unique_violation_field(err, ("name",)) is None:
            raise
        logger.warning("Role name %r already taken", name)
        raise ConflictError("name") from None

    logger.info("Created role %s (%s)", role.id, role.name)
    return role.to_dict()
