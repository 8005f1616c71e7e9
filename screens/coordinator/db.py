# screens/coordinator/db.py
from __future__ import annotations
from typing import Any, Dict, List, Tuple

from core.constants import COURSES
from core.document_store import DocumentStore
from screens.disciplines.db import disciplines_for_courses, load_disciplines


def coordinator_disciplines(store: DocumentStore, coordinator_id: str) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Courses coordinated by ``coordinator_id`` and the disciplines linked to any of them."""
    courses = [c for c in store.list(COURSES) if c.get("coordinator_id") == coordinator_id]
    courses.sort(key=lambda c: (c.get("name") or "").lower())
    disciplines = disciplines_for_courses(load_disciplines(store), (c["id"] for c in courses))
    return courses, disciplines
