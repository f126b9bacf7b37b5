from __future__ import annotations

from typing import Any, Dict, List, Optional

from innovatehub.documents import (
    Collection,
    DeleteResult,
    InsertOneResult,
    UpdateResult,
    parse_object_id,
)


# Fields replaced by PUT /contests/{id}; anything else on the document is kept.
CONTEST_INFO_FIELDS = (
    "name",
    "contestPrice",
    "prizeMoney",
    "image",
    "tag",
    "deadline",
    "description",
    "instruction",
)


def contests(conn: Any) -> Collection:
    return Collection(conn, "contests")


def registers(conn: Any) -> Collection:
    return Collection(conn, "registers")


def best_creators(conn: Any) -> Collection:
    return Collection(conn, "bestCreator")


# -----------------------------
# Contests
# -----------------------------


def list_contests(conn: Any) -> List[Dict[str, Any]]:
    return contests(conn).find()


def get_contest(conn: Any, contest_id: str) -> Optional[Dict[str, Any]]:
    return contests(conn).find_one({"_id": parse_object_id(contest_id)})


def create_contest(conn: Any, contest: Dict[str, Any]) -> InsertOneResult:
    return contests(conn).insert_one(contest)


def update_contest_status(conn: Any, contest_id: str, *, status: Any, participated: Any) -> UpdateResult:
    return contests(conn).update_one(
        {"_id": parse_object_id(contest_id)},
        {"status": status, "participated": participated},
    )


def replace_contest_info(conn: Any, contest_id: str, info: Dict[str, Any]) -> UpdateResult:
    """Overwrite the descriptive fields; creates the contest if the id is new.

    Fields missing from `info` are written as null.
    """
    fields = {k: info.get(k) for k in CONTEST_INFO_FIELDS}
    return contests(conn).update_one({"_id": parse_object_id(contest_id)}, fields, upsert=True)


def delete_contest(conn: Any, contest_id: str) -> DeleteResult:
    return contests(conn).delete_one({"_id": parse_object_id(contest_id)})


# -----------------------------
# Registrations
# -----------------------------
# NOTE: user/contest references are stored as sent. Duplicates and dangling
# references are accepted.


def list_registrations(conn: Any) -> List[Dict[str, Any]]:
    return registers(conn).find()


def create_registration(conn: Any, registration: Dict[str, Any]) -> InsertOneResult:
    return registers(conn).insert_one(registration)


def set_registration_winner(conn: Any, registration_id: str, winner: Any) -> UpdateResult:
    return registers(conn).update_one({"_id": parse_object_id(registration_id)}, {"winner": winner})


def set_registration_status(conn: Any, registration_id: str, status: Any) -> UpdateResult:
    return registers(conn).update_one(
        {"_id": parse_object_id(registration_id)},
        {"status": status},
        upsert=True,
    )


# -----------------------------
# Best creators
# -----------------------------


def list_best_creators(conn: Any) -> List[Dict[str, Any]]:
    return best_creators(conn).find()


def import_best_creators(conn: Any, creators: List[Dict[str, Any]], *, replace: bool = False) -> int:
    """Load the out-of-band best-creator listing. Returns rows inserted."""
    coll = best_creators(conn)
    if replace:
        for doc in coll.find():
            coll.delete_one({"_id": doc["_id"]})
    for creator in creators:
        coll.insert_one(creator)
    return len(creators)
