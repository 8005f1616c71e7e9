# core/document_store.py
"""
Collections of JSON documents kept in the ``documents`` table.

Every document is a plain dict with a generated string ``id``. Writes are
one transaction per document; there is no multi-document transaction and
the last write wins.
"""
from __future__ import annotations
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.errors import NotFoundError, PersistenceError

log = logging.getLogger(__name__)

Document = Dict[str, Any]


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def new_id() -> str:
    return uuid.uuid4().hex


def _dumps(data: Document) -> str:
    body = {k: v for k, v in data.items() if k != "id"}
    return json.dumps(body, ensure_ascii=False, default=str)


def _loads(doc_id: str, raw: str) -> Document:
    try:
        data = json.loads(raw) or {}
    except ValueError:
        log.warning("Corrupt document %s, returning empty body", doc_id)
        data = {}
    data["id"] = doc_id
    return data


class DocumentStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    def list(self, collection: str) -> List[Document]:
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(sa_text(
                    "SELECT id, data_json FROM documents WHERE collection=:c ORDER BY rowid"
                ), {"c": collection}).fetchall()
        except SQLAlchemyError as e:
            log.error("Failed to read collection %s", collection, exc_info=True)
            raise PersistenceError(f"Could not load {collection}") from e
        return [_loads(r[0], r[1]) for r in rows]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            with self.engine.begin() as conn:
                row = conn.execute(sa_text(
                    "SELECT id, data_json FROM documents WHERE collection=:c AND id=:id"
                ), {"c": collection, "id": doc_id}).fetchone()
        except SQLAlchemyError as e:
            log.error("Failed to read %s/%s", collection, doc_id, exc_info=True)
            raise PersistenceError(f"Could not load {collection} document") from e
        return _loads(row[0], row[1]) if row else None

    def find(self, collection: str, **equals: Any) -> List[Document]:
        return [
            d for d in self.list(collection)
            if all(d.get(k) == v for k, v in equals.items())
        ]

    def add(self, collection: str, data: Document) -> str:
        doc_id = new_id()
        try:
            with self.engine.begin() as conn:
                conn.execute(sa_text("""
                    INSERT INTO documents (collection, id, data_json)
                    VALUES (:c, :id, :data)
                """), {"c": collection, "id": doc_id, "data": _dumps(data)})
        except SQLAlchemyError as e:
            log.error("Failed to add document to %s", collection, exc_info=True)
            raise PersistenceError(f"Could not save {collection} document") from e
        return doc_id

    def update(self, collection: str, doc_id: str, fields: Document) -> Document:
        """Shallow-merge ``fields`` into an existing document and return the result."""
        try:
            with self.engine.begin() as conn:
                row = conn.execute(sa_text(
                    "SELECT data_json FROM documents WHERE collection=:c AND id=:id"
                ), {"c": collection, "id": doc_id}).fetchone()
                if not row:
                    raise NotFoundError(f"{collection} document {doc_id} not found")
                merged = _loads(doc_id, row[0])
                merged.update({k: v for k, v in fields.items() if k != "id"})
                conn.execute(sa_text("""
                    UPDATE documents SET data_json=:data, updated_at=CURRENT_TIMESTAMP
                    WHERE collection=:c AND id=:id
                """), {"c": collection, "id": doc_id, "data": _dumps(merged)})
        except SQLAlchemyError as e:
            log.error("Failed to update %s/%s", collection, doc_id, exc_info=True)
            raise PersistenceError(f"Could not update {collection} document") from e
        return merged

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(sa_text(
                    "DELETE FROM documents WHERE collection=:c AND id=:id"
                ), {"c": collection, "id": doc_id})
        except SQLAlchemyError as e:
            log.error("Failed to delete %s/%s", collection, doc_id, exc_info=True)
            raise PersistenceError(f"Could not delete {collection} document") from e

    def count(self, collection: str) -> int:
        try:
            with self.engine.begin() as conn:
                row = conn.execute(sa_text(
                    "SELECT COUNT(*) FROM documents WHERE collection=:c"
                ), {"c": collection}).fetchone()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not count {collection}") from e
        return int(row[0]) if row else 0
