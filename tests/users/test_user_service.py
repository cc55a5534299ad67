"""Service-level tests for the user store accessor."""

import math

import pytest
from werkzeug.security import check_password_hash

from errors import ConflictError, NotFoundError, ValidationError
from extensions import db
from modules.users import services
from modules.users.models import User


def test_create_user_hashes_password_and_hides_it(app, make_user):
    user = make_user("alice", email="  a@x.com ", password="pw1")

    assert "password" not in user
    assert user["email"] == "a@x.com"
    assert user["status"] is False
    assert user["isDelete"] is False
    assert user["role"] is None
    assert user["fullName"] == ""

    stored = db.session.get(User, user["id"])
    assert stored.password != "pw1"
    assert check_password_hash(stored.password, "pw1")


def test_create_user_trims_username(app, make_user):
    user = make_user("  bob  ", email="b@x.com")
    assert user["username"] == "bob"


@pytest.mark.parametrize("missing", ["username", "password", "email"])
def test_create_user_requires_fields(app, missing):
    payload = {"username": "carol", "password": "pw", "email": "c@x.com"}
    payload[missing] = ""
    with pytest.raises(ValidationError) as exc:
        services.create_user(payload)
    assert exc.value.status == 400


def test_create_user_duplicate_username_conflicts(app, make_user):
    make_user("alice", email="a@x.com")
    with pytest.raises(ConflictError) as exc:
        make_user("alice", email="other@x.com")
    assert exc.value.status == 409
    assert exc.value.field == "username"
    assert str(exc.value) == "username must be unique"


def test_create_user_duplicate_email_conflicts(app, make_user):
    make_user("alice", email="a@x.com")
    with pytest.raises(ConflictError) as exc:
        make_user("alice2", email="a@x.com")
    assert exc.value.field == "email"


def test_create_user_with_role(app, make_user, role):
    user = make_user("dave", role=role["id"])
    assert user["role"] == {"id": role["id"], "name": "admin"}


def test_create_user_invalid_role_id(app, make_user):
    with pytest.raises(ValidationError, match="Invalid role id"):
        make_user("erin", role="not-an-id")


def test_create_user_unknown_role(app, make_user):
    with pytest.raises(NotFoundError, match="Role not found"):
        make_user("erin", role=999)


def test_get_all_users_newest_first_without_password(app, make_user):
    for name in ("u1", "u2", "u3"):
        make_user(name)

    users = services.get_all_users()
    assert [u["username"] for u in users] == ["u3", "u2", "u1"]
    assert all("password" not in u for u in users)


def test_get_all_users_filters_case_insensitive(app, make_user):
    make_user("Alice", fullName="Alice Liddell")
    make_user("bob", fullName="Bob Builder")

    assert [u["username"] for u in services.get_all_users(username="ali")] == ["Alice"]
    assert [u["username"] for u in services.get_all_users(full_name="BUILD")] == ["bob"]
    assert services.get_all_users(username="%") == []


@pytest.mark.parametrize("total, limit", [(0, 3), (1, 3), (7, 3), (9, 3), (5, 10)])
def test_pages_concatenate_to_full_listing(app, make_user, total, limit):
    for i in range(total):
        make_user(f"user{i}")

    full = services.get_all_users()
    first = services.get_all_users(page=1, limit=limit)
    assert first["total"] == total
    assert first["pages"] == math.ceil(total / limit)

    collected = []
    for page in range(1, first["pages"] + 1):
        envelope = services.get_all_users(page=page, limit=limit)
        assert len(envelope["items"]) <= limit
        assert envelope["page"] == page
        collected.extend(envelope["items"])
    assert [u["id"] for u in collected] == [u["id"] for u in full]


def test_pagination_defaults_for_bad_values(app, make_user):
    make_user("solo")
    envelope = services.get_all_users(page="0", limit="abc")
    assert envelope["page"] == 1
    assert envelope["limit"] == 10
    assert envelope["pages"] == 1


def test_soft_deleted_user_hidden_but_reachable_by_id(app, make_user):
    alice = make_user("alice")
    make_user("bob")

    deleted = services.soft_delete_user(alice["id"])
    assert deleted["isDelete"] is True

    assert [u["username"] for u in services.get_all_users()] == ["bob"]
    assert services.get_user_by_username("alice") is None
    assert services.get_user_by_id(alice["id"])["isDelete"] is True


def test_soft_delete_invalid_or_missing_id(app):
    assert services.soft_delete_user("xyz") is None
    assert services.soft_delete_user(12345) is None


def test_get_user_by_id_invalid_or_missing(app):
    assert services.get_user_by_id("abc") is None
    assert services.get_user_by_id(42) is None


def test_update_ignores_fields_outside_allow_list(app, make_user):
    user = make_user("alice")
    updated = services.update_user(user["id"], {"isDelete": True, "fullName": "X", "createdAt": "1999"})

    assert updated["fullName"] == "X"
    assert updated["isDelete"] is False
    assert updated["createdAt"] == user["createdAt"]


def test_update_rehashes_password(app, make_user):
    user = make_user("alice", password="old")
    services.update_user(user["id"], {"password": "new"})

    stored = db.session.get(User, user["id"])
    assert check_password_hash(stored.password, "new")
    assert not check_password_hash(stored.password, "old")


def test_update_empty_password_keeps_hash(app, make_user):
    user = make_user("alice", password="old")
    services.update_user(user["id"], {"password": "", "fullName": "A"})

    stored = db.session.get(User, user["id"])
    assert check_password_hash(stored.password, "old")


def test_update_role_validation(app, make_user, role):
    user = make_user("alice")

    with pytest.raises(ValidationError):
        services.update_user(user["id"], {"role": "bad"})
    with pytest.raises(NotFoundError):
        services.update_user(user["id"], {"role": 999})

    assert services.update_user(user["id"], {"role": role["id"]})["role"]["name"] == "admin"
    assert services.update_user(user["id"], {"role": ""})["role"] is None


def test_update_conflict(app, make_user):
    make_user("alice")
    bob = make_user("bob")
    with pytest.raises(ConflictError, match="username must be unique"):
        services.update_user(bob["id"], {"username": "alice"})

    assert services.get_user_by_id(bob["id"])["username"] == "bob"


def test_update_rejects_blank_username(app, make_user):
    user = make_user("alice")
    with pytest.raises(ValidationError):
        services.update_user(user["id"], {"username": "   "})


def test_update_missing_or_invalid_id(app):
    assert services.update_user("nope", {"fullName": "X"}) is None
    assert services.update_user(777, {"fullName": "X"}) is None


def test_update_status_from_form_strings(app, make_user):
    user = make_user("alice")
    assert services.update_user(user["id"], {"status": "true"})["status"] is True
    assert services.update_user(user["id"], {"status": "false"})["status"] is False


def test_verify_requires_matching_pair(app, make_user):
    make_user("alice", email="a@x.com")

    assert services.verify_user("a@x.com", "wrong") is None
    assert services.get_user_by_username("alice")["status"] is False

    verified = services.verify_user("a@x.com", "alice")
    assert verified["status"] is True


def test_verify_skips_deleted_and_blank(app, make_user):
    alice = make_user("alice", email="a@x.com")
    services.soft_delete_user(alice["id"])

    assert services.verify_user("a@x.com", "alice") is None
    assert services.verify_user("", "alice") is None
    assert services.get_user_by_id(alice["id"])["status"] is False
