# schemas/documents_schema.py
from __future__ import annotations

from sqlalchemy import text as sa_text
from core.schema_registry import register


@register("documents")
def install_documents(engine):
    """One table holds every collection: courses, disciplines, people, admins, audit_log, upload_history."""
    with engine.begin() as conn:
        conn.execute(sa_text("""
        CREATE TABLE IF NOT EXISTS documents (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            data_json TEXT NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (collection, id)
        )"""))
        conn.execute(sa_text(
            "CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection)"
        ))
