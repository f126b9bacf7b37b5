"""Document collections on top of db.connect().

A small MongoDB-flavoured API (find / find_one / insert_one / update_one /
delete_one) over the JSON tables from schema.py. Results are returned the way
the HTTP layer sends them back to clients: documents with `_id` merged in, and
insert/update/delete results with the driver-style camelCase counters.

Filters are equality-only dicts, e.g. {"_id": "..."} or {"email": "..."}.
"""

from __future__ import annotations

import json
import re
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from innovatehub.schema import table_for


_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")
_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def utcnow_iso() -> str:
    """Current UTC time as ISO-8601 string with Z."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def new_object_id() -> str:
    """24 hex chars: 4-byte big-endian seconds timestamp + 8 random bytes."""
    return int(time.time()).to_bytes(4, "big").hex() + secrets.token_hex(8)


def parse_object_id(value: str) -> str:
    s = (value or "").strip()
    if not _OBJECT_ID_RE.match(s):
        raise ValueError("invalid_object_id")
    return s.lower()


# -----------------------------
# Results
# -----------------------------


@dataclass(frozen=True)
class InsertOneResult:
    inserted_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"acknowledged": True, "insertedId": self.inserted_id}


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "acknowledged": True,
            "matchedCount": self.matched_count,
            "modifiedCount": self.modified_count,
            "upsertedCount": 1 if self.upserted_id is not None else 0,
            "upsertedId": self.upserted_id,
        }


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"acknowledged": True, "deletedCount": self.deleted_count}


# -----------------------------
# Collection
# -----------------------------


class Collection:
    """One collection bound to an open connection (see db.connect)."""

    def __init__(self, conn: Any, name: str):
        self._conn = conn
        self.name = name
        self._table = table_for(name)
        self._dialect = getattr(conn, "dialect", "sqlite")

    # --- filters ---

    def _field_clause(self, field: str, value: Any) -> Tuple[str, List[Any]]:
        if not _FIELD_RE.match(field):
            raise ValueError(f"invalid_field: {field}")

        if self._dialect == "postgres":
            expr = "(body::jsonb ->> ?)"
            if value is None:
                return f"{expr} IS NULL", [field]
            # ->> yields text; compare against the JSON text form for non-strings.
            return f"{expr} = ?", [field, value if isinstance(value, str) else json.dumps(value)]

        expr = "json_extract(body, ?)"
        path = f'$."{field}"'
        if value is None:
            return f"{expr} IS NULL", [path]
        if isinstance(value, bool):
            value = int(value)
        return f"{expr} = ?", [path, value]

    def _where(self, query: Optional[Dict[str, Any]]) -> Tuple[str, List[Any]]:
        clauses: List[str] = []
        params: List[Any] = []
        for field, value in (query or {}).items():
            if field == "_id":
                clauses.append("doc_id = ?")
                params.append(str(value))
                continue
            clause, p = self._field_clause(field, value)
            clauses.append(clause)
            params.extend(p)
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    def _select(self, query: Optional[Dict[str, Any]], *, limit: Optional[int] = None) -> List[Any]:
        where, params = self._where(query)
        sql = f"SELECT doc_id, body FROM {self._table}{where} ORDER BY seq"
        if limit is not None:
            sql += f" LIMIT {int(limit)}"
        return self._conn.execute(sql, params).fetchall()

    @staticmethod
    def _to_document(row: Any) -> Dict[str, Any]:
        body = json.loads(row["body"])
        return {"_id": row["doc_id"], **body}

    # --- reads ---

    def find(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return [self._to_document(r) for r in self._select(query)]

    def find_one(self, query: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        rows = self._select(query, limit=1)
        if not rows:
            return None
        return self._to_document(rows[0])

    # --- writes ---

    def _insert_row(self, doc_id: str, body: Dict[str, Any]) -> None:
        now = utcnow_iso()
        self._conn.execute(
            f"INSERT INTO {self._table} (doc_id, body, created_at, updated_at) VALUES (?,?,?,?)",
            (doc_id, json.dumps(body), now, now),
        )

    def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        body = dict(document)
        # Honour a caller-supplied _id, as the document store would.
        raw_id = body.pop("_id", None)
        doc_id = str(raw_id) if raw_id else new_object_id()
        self._insert_row(doc_id, body)
        return InsertOneResult(inserted_id=doc_id)

    def update_one(
        self,
        query: Dict[str, Any],
        set_fields: Dict[str, Any],
        *,
        upsert: bool = False,
    ) -> UpdateResult:
        """Apply a `$set` of `set_fields` to the first matching document.

        With upsert=True and no match, a new document is created from the
        query's equality fields plus `set_fields`; the query's `_id` (if any)
        becomes the new document's id.
        """
        fields = {k: v for k, v in set_fields.items() if k != "_id"}
        rows = self._select(query, limit=1)

        if rows:
            row = rows[0]
            body = json.loads(row["body"])
            merged = {**body, **fields}
            if merged == body:
                return UpdateResult(matched_count=1, modified_count=0)
            self._conn.execute(
                f"UPDATE {self._table} SET body=?, updated_at=? WHERE doc_id=?",
                (json.dumps(merged), utcnow_iso(), row["doc_id"]),
            )
            return UpdateResult(matched_count=1, modified_count=1)

        if not upsert:
            return UpdateResult(matched_count=0, modified_count=0)

        seed = {k: v for k, v in (query or {}).items() if k != "_id"}
        doc_id = str(query["_id"]) if query.get("_id") else new_object_id()
        self._insert_row(doc_id, {**seed, **fields})
        return UpdateResult(matched_count=0, modified_count=0, upserted_id=doc_id)

    def delete_one(self, query: Dict[str, Any]) -> DeleteResult:
        rows = self._select(query, limit=1)
        if not rows:
            return DeleteResult(deleted_count=0)
        cur = self._conn.execute(f"DELETE FROM {self._table} WHERE doc_id=?", (rows[0]["doc_id"],))
        return DeleteResult(deleted_count=int(cur.rowcount or 0))
