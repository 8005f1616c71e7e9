# -------------------------------------------------------------------
# screens/courses/db.py
# Course documents, the coordinator limit and the save/delete flows.
# -------------------------------------------------------------------
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.audit import diff, log_action
from core.constants import (
    COURSES,
    MAX_COURSES_PER_COORDINATOR,
    MAX_COURSES_PER_DISCIPLINE,
    PEOPLE,
)
from core.document_store import DocumentStore, now_iso
from core.errors import CapacityError, NotFoundError, ValidationError
from core.importing import full_name, key
from core.session import Session
from screens.courses.linking import SyncResult, sync_course_disciplines

log = logging.getLogger(__name__)

AUDITED_FIELDS = ("name", "coordinator_id")


@dataclass
class CourseForm:
    name: str = ""
    coordinator_id: Optional[str] = None
    tutor_id: Optional[str] = None
    discipline_ids: List[str] = field(default_factory=list)


def load_courses(store: DocumentStore) -> List[Dict[str, Any]]:
    courses = store.list(COURSES)
    courses.sort(key=lambda c: (c.get("name") or "").lower())
    return courses


def courses_of_coordinator(courses: List[Dict[str, Any]], coordinator_id: str,
                           exclude_course_id: Optional[str] = None) -> List[Dict[str, Any]]:
    return [
        c for c in courses
        if c.get("coordinator_id") == coordinator_id and c.get("id") != exclude_course_id
    ]


def check_coordinator_capacity(
    courses: List[Dict[str, Any]],
    coordinator_id: Optional[str],
    editing_course_id: Optional[str] = None,
    limit: int = MAX_COURSES_PER_COORDINATOR,
) -> None:
    """
    Raise CapacityError if assigning ``coordinator_id`` to one more course
    would exceed ``limit``. The course being edited does not count against
    its own coordinator, so re-saving an unchanged course always passes.
    """
    if not coordinator_id:
        return
    held = courses_of_coordinator(courses, coordinator_id, editing_course_id)
    if len(held) >= limit:
        raise CapacityError(
            f"This coordinator is already linked to {len(held)} courses. "
            f"The maximum allowed is {limit} courses per coordinator."
        )


def _person_ref(store: DocumentStore, person_id: Optional[str], label: str) -> Tuple[Optional[str], Optional[str]]:
    if not person_id:
        return None, None
    person = store.get(PEOPLE, person_id)
    if person is None:
        raise NotFoundError(f"Selected {label} no longer exists")
    return person["id"], full_name(person)


def save_course(
    store: DocumentStore,
    form: CourseForm,
    session: Optional[Session],
    editing: Optional[Dict[str, Any]] = None,
    coordinator_limit: int = MAX_COURSES_PER_COORDINATOR,
    discipline_limit: int = MAX_COURSES_PER_DISCIPLINE,
) -> Tuple[str, SyncResult]:
    """
    Create or update a course, then make exactly ``form.discipline_ids``
    reference it. Validation and the coordinator limit are checked before
    anything is written. Returns the course id and the link sync result.
    """
    name = (form.name or "").strip()
    if not name:
        raise ValidationError("Course name is required")

    courses = store.list(COURSES)
    others = [c for c in courses if not editing or c["id"] != editing["id"]]
    if any(key(c.get("name")) == key(name) for c in others):
        raise ValidationError(f'A course named "{name}" already exists')

    check_coordinator_capacity(
        courses, form.coordinator_id,
        editing_course_id=editing["id"] if editing else None,
        limit=coordinator_limit,
    )

    coordinator_id, coordinator_name = _person_ref(store, form.coordinator_id, "coordinator")
    tutor_id, tutor_name = _person_ref(store, form.tutor_id, "tutor")
    data = {
        "name": name,
        "coordinator_id": coordinator_id,
        "coordinator_name": coordinator_name,
        "tutor_id": tutor_id,
        "tutor_name": tutor_name,
    }

    if editing:
        course_id = editing["id"]
        store.update(COURSES, course_id, data)
        log_action(store, session, "update", "course", course_id, name,
                   diff(editing, data, AUDITED_FIELDS))
    else:
        course_id = store.add(COURSES, {**data, "created_at": now_iso()})
        log_action(store, session, "create", "course", course_id, name)

    result = sync_course_disciplines(store, course_id, name, form.discipline_ids, discipline_limit)
    return course_id, result


def delete_course(store: DocumentStore, course: Dict[str, Any], session: Optional[Session]) -> None:
    """Delete the course document only; disciplines keep their references."""
    store.delete(COURSES, course["id"])
    log_action(store, session, "delete", "course", course["id"], course.get("name") or "")
    log.info("Course %s deleted", course["id"])


def coordinator_course_counts(courses: List[Dict[str, Any]]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for c in courses:
        cid = c.get("coordinator_id")
        if cid:
            counts[cid] = counts.get(cid, 0) + 1
    return counts
