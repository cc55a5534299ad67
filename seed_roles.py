# -*- coding: utf-8 -*-
"""
seed_roles.py: initialise the users/roles tables and the default roles.

Modes:
- python seed_roles.py --create    → create MISSING tables (keeps data)
- python seed_roles.py --seed      → create missing tables and the default roles
- python seed_roles.py --reset     → drop users/roles and create them again (all data is lost)

Works with SQLite and PostgreSQL.
"""

import argparse
from sqlalchemy import text

from app import create_app
from errors import ConflictError
from extensions import db
from modules.roles.services import create_role, get_role_by_name

DEFAULT_ROLES = ["admin", "user"]


def drop_tables():
    """Drop users before roles."""
    for stmt in ("DROP TABLE IF EXISTS users", "DROP TABLE IF EXISTS roles"):
        db.session.execute(text(stmt))
    db.session.commit()


def create_missing_tables():
    """Create tables missing for the current models (no ALTER of existing ones)."""
    db.create_all()
    db.session.commit()


def seed_default_roles(names=DEFAULT_ROLES):
    created = []
    for name in names:
        if get_role_by_name(name):
            continue
        try:
            created.append(create_role(name)["name"])
        except ConflictError:
            # present but soft-deleted
            continue
    return created


def main():
    parser = argparse.ArgumentParser(description="Init users/roles DB tables")
    grp = parser.add_mutually_exclusive_group(required=True)
    grp.add_argument("--create", action="store_true", help="create missing tables (nothing is dropped)")
    grp.add_argument("--seed", action="store_true", help="create missing tables and default roles")
    grp.add_argument("--reset", action="store_true", help="drop users/roles and recreate them (data is lost)")

    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        if args.reset:
            print("→ Dropping users/roles tables …")
            drop_tables()
            print("→ Creating tables …")
            create_missing_tables()
            print("✔ Done: users/roles tables recreated from scratch.")
        elif args.seed:
            create_missing_tables()
            created = seed_default_roles()
            print(f"✔ Done: roles created: {', '.join(created) or 'none (already present)'}")
        elif args.create:
            print("→ Creating missing tables …")
            create_missing_tables()
            print("✔ Done: missing tables created (existing ones untouched).")


if __name__ == "__main__":
    main()
