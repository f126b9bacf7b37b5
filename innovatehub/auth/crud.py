from __future__ import annotations

from typing import Any, Dict, List, Optional

from innovatehub.config import Config
from innovatehub.db import connect
from innovatehub.documents import (
    Collection,
    DeleteResult,
    InsertOneResult,
    UpdateResult,
    parse_object_id,
)


ROLE_ADMIN = "admin"
ROLE_CREATOR = "creator"


def users(conn: Any) -> Collection:
    return Collection(conn, "users")


def normalize_email(email: str | None) -> str:
    return (email or "").strip()


def list_users(conn: Any) -> List[Dict[str, Any]]:
    return users(conn).find()


def get_user_by_email(conn: Any, email: str | None) -> Optional[Dict[str, Any]]:
    e = normalize_email(email)
    if not e:
        return None
    return users(conn).find_one({"email": e})


def has_role(user: Optional[Dict[str, Any]], role: str) -> bool:
    if user is None:
        return False
    return user.get("role") == role


def create_user_if_absent(conn: Any, user: Dict[str, Any]) -> Optional[InsertOneResult]:
    """Insert the sign-in payload unless a user with the same email exists.

    Returns None when the user already exists. A payload without an email
    matches any stored user whose email is missing or null.
    """
    if users(conn).find_one({"email": user.get("email")}) is not None:
        return None
    return users(conn).insert_one(user)


def set_user_role(conn: Any, user_id: str, role: Any) -> UpdateResult:
    return users(conn).update_one({"_id": parse_object_id(user_id)}, {"role": role})


def set_user_name(conn: Any, user_id: str, name: Any) -> UpdateResult:
    return users(conn).update_one({"_id": parse_object_id(user_id)}, {"name": name})


def delete_user(conn: Any, user_id: str) -> DeleteResult:
    return users(conn).delete_one({"_id": parse_object_id(user_id)})


def bootstrap_admin_if_needed(cfg: Config) -> Optional[Dict[str, Any]]:
    """Create the first admin user if the users collection is empty.

    Controlled by BOOTSTRAP_ADMIN_EMAIL; unset means nothing is created. Only
    runs when there are 0 users, so it never re-roles an existing account.
    """
    email = normalize_email(cfg.BOOTSTRAP_ADMIN_EMAIL)
    if not email:
        return None

    with connect(cfg.DB_DSN) as conn:
        coll = users(conn)
        if coll.find_one() is not None:
            return None
        coll.insert_one({"email": email, "name": "admin", "role": ROLE_ADMIN})
        return coll.find_one({"email": email})
