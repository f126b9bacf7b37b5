"""Database schema for the InnovateHub backend.

Every collection is a table of JSON documents:

    seq         insertion order (natural order of find())
    doc_id      opaque 24-hex id (the document's `_id`)
    body        JSON text of every other field
    created_at  ISO-8601 UTC with 'Z'
    updated_at  ISO-8601 UTC with 'Z'

Fields are never promoted to columns. Lookups by field (e.g. users by email)
go through the engine's JSON operators; see documents.py.
"""

from __future__ import annotations

import re
from typing import Dict


# Public collection name -> table name.
COLLECTIONS: Dict[str, str] = {
    "users": "users",
    "contests": "contests",
    "registers": "registers",
    "bestCreator": "best_creators",
}


_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS {table} (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    doc_id TEXT NOT NULL UNIQUE,
    body TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def _build_schema() -> str:
    return "".join(_TABLE_DDL.format(table=t) for t in COLLECTIONS.values())


SCHEMA_SQLITE = _build_schema()


def _sqlite_to_postgres(ddl: str) -> str:
    # AUTOINCREMENT primary keys
    return re.sub(
        r"INTEGER\s+PRIMARY\s+KEY\s+AUTOINCREMENT",
        "BIGSERIAL PRIMARY KEY",
        ddl,
        flags=re.IGNORECASE,
    )


SCHEMA_POSTGRES = _sqlite_to_postgres(SCHEMA_SQLITE)


def get_schema_sql(dialect: str) -> str:
    d = (dialect or "").lower()
    if d.startswith("post"):
        return SCHEMA_POSTGRES
    return SCHEMA_SQLITE


def table_for(collection: str) -> str:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"unknown_collection: {collection}") from None
