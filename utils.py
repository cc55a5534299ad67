import math
import re

from flask import current_app, request

TRUE_STRINGS = {'1', 'true', 'yes', 'on'}
# largest value a signed 64-bit INTEGER column accepts
MAX_SQL_INT = 2 ** 63 - 1


def to_int(value, default):
    """Parse a positive integer, falling back to ``default`` for anything else."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if 0 < number <= MAX_SQL_INT else default


def parse_id(value):
    """Return ``value`` as a record id, or None when it is not a valid one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 < value <= MAX_SQL_INT else None
    if isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
        return number if 0 < number <= MAX_SQL_INT else None
    return None


def parse_flag(value) -> bool:
    """Normalise query/form flags: only explicit true-like strings count."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    if isinstance(value, int):
        return value != 0
    return False


def contains_pattern(value) -> str:
    """Build an ILIKE pattern matching ``value`` as a literal substring."""
    escaped = str(value).replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'


def paginate(query, page, limit, serialize):
    """
    Run an ordered query either as a plain list or as a page envelope.

    Paging kicks in as soon as ``page`` or ``limit`` is given; bad values fall
    back to page 1 and the configured default limit.
    """
    if not (page or limit):
        return [serialize(row) for row in query.all()]

    page = to_int(page, 1)
    limit = to_int(limit, current_app.config.get('DEFAULT_PAGE_LIMIT', 10))
    if (page - 1) * limit > MAX_SQL_INT:
        page = 1
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return {
        'items': [serialize(row) for row in rows],
        'total': total,
        'page': page,
        'limit': limit,
        'pages': math.ceil(total / limit),
    }


# where each driver names the violated index: SQLite, PostgreSQL, MySQL
_CONSTRAINT_PATTERNS = (
    re.compile(r'unique constraint failed: ([\w., ]+)'),
    re.compile(r'unique constraint "([^"]+)"'),
    re.compile(r"for key '([^']+)'"),
)


def unique_violation_field(error, fields):
    """
    Name the column behind a unique-constraint IntegrityError.

    Only the constraint/column part of the driver message is inspected, never
    the echoed duplicate value. Returns None when the error is not a uniqueness
    violation at all, and ``'field'`` when the column cannot be told.
    """
    message = str(getattr(error, 'orig', error)).lower()
    if 'unique' not in message and 'duplicate' not in message:
        return None
    names = [m.group(1) for pattern in _CONSTRAINT_PATTERNS for m in pattern.finditer(message)]
    for name in names:
        for field in fields:
            if re.search(rf'(?<![a-z]){re.escape(field)}(?![a-z])', name):
                return field
    return 'field'


def request_payload() -> dict:
    """Body of the current request as a dict, JSON first, then form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
