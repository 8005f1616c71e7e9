# core/audit.py
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from core.constants import AUDIT_LOG
from core.document_store import DocumentStore, now_iso
from core.session import Session

log = logging.getLogger(__name__)

AUDIT_ACTIONS = ("create", "update", "delete")
AUDIT_ENTITIES = ("person", "course", "discipline")

Changes = Dict[str, Dict[str, Any]]


def diff(before: Dict[str, Any], after: Dict[str, Any], fields) -> Changes:
    """``{field: {"before": ..., "after": ...}}`` for the given fields."""
    return {f: {"before": before.get(f), "after": after.get(f)} for f in fields}


def log_action(
    store: DocumentStore,
    session: Optional[Session],
    action: str,
    entity: str,
    entity_id: str,
    entity_name: str,
    changes: Optional[Changes] = None,
) -> None:
    """Append an audit entry. Failures are logged and never block the caller."""
    if session is None:
        return
    if action not in AUDIT_ACTIONS or entity not in AUDIT_ENTITIES:
        log.error("Refusing audit entry with unknown action/entity %r/%r for %s", action, entity, entity_id)
        return
    entry: Dict[str, Any] = {
        "user_id": session.user_id,
        "user_email": session.email,
        "action": action,
        "entity": entity,
        "entity_id": entity_id,
        "entity_name": entity_name,
        "timestamp": now_iso(),
    }
    if changes:
        entry["changes"] = changes
    try:
        store.add(AUDIT_LOG, entry)
    except Exception:
        log.error("Audit write failed for %s %s %s", action, entity, entity_id, exc_info=True)
