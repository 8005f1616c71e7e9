# -------------------------------------------------------------------
# screens/disciplines/db.py
# Discipline documents: months, save/delete, inline login edits, filters.
# -------------------------------------------------------------------
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core.audit import diff, log_action
from core.constants import COURSES, DISCIPLINES, MAX_COURSES_PER_DISCIPLINE
from core.document_store import DocumentStore, now_iso
from core.errors import CapacityError, NotFoundError, ValidationError
from core.importing import clean, key
from core.session import Session
from screens.disciplines.constants import LOGIN_FIELDS, SORT_ALPHABETICAL

log = logging.getLogger(__name__)

AUDITED_FIELDS = ("name", "course_ids")

# "3", "03", "2025-03", "2025-03-01", "2025-03-01 00:00:00"
_MONTH_RE = re.compile(r"^(?:(\d{4})-)?(\d{1,2})(?:-\d{1,2}(?:[ T].*)?)?$")


def parse_month(value: Any) -> Optional[int]:
    """Month code 1-12 from a form or spreadsheet cell, or None when blank."""
    text = clean(value)
    if not text:
        return None
    m = _MONTH_RE.match(text)
    if not m:
        raise ValidationError(f'Invalid month "{text}" (use 1-12 or YYYY-MM)')
    month = int(m.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(f'Invalid month "{text}" (use 1-12 or YYYY-MM)')
    return month


def format_month(month: Optional[int]) -> str:
    return f"{month:02d}" if month else ""


@dataclass
class DisciplineForm:
    name: str = ""
    course_ids: List[str] = field(default_factory=list)
    coordinator_login: str = ""
    professor_login: str = ""
    tutor_login: str = ""
    month_1: Any = None
    month_2: Any = None


def load_disciplines(store: DocumentStore) -> List[Dict[str, Any]]:
    disciplines = store.list(DISCIPLINES)
    disciplines.sort(key=lambda d: (d.get("name") or "").lower())
    return disciplines


def course_names_for(store: DocumentStore, course_ids: Iterable[str]) -> List[str]:
    """Display names for ``course_ids``, in the same order."""
    names = []
    for cid in course_ids:
        course = store.get(COURSES, cid)
        if course is None:
            raise NotFoundError("A selected course no longer exists")
        names.append(course.get("name") or "")
    return names


def save_discipline(
    store: DocumentStore,
    form: DisciplineForm,
    session: Optional[Session],
    editing: Optional[Dict[str, Any]] = None,
    limit: int = MAX_COURSES_PER_DISCIPLINE,
) -> str:
    name = (form.name or "").strip()
    if not name:
        raise ValidationError("Discipline name is required")
    course_ids = list(dict.fromkeys(form.course_ids or []))
    if not course_ids:
        raise ValidationError("Select at least one course")
    if len(course_ids) > limit:
        raise CapacityError(f"A discipline can be linked to at most {limit} courses")
    month_1 = parse_month(form.month_1)
    month_2 = parse_month(form.month_2)

    data = {
        "name": name,
        "course_ids": course_ids,
        "course_names": course_names_for(store, course_ids),
        "coordinator_login": (form.coordinator_login or "").strip(),
        "professor_login": (form.professor_login or "").strip(),
        "tutor_login": (form.tutor_login or "").strip(),
        "month_1": month_1,
        "month_2": month_2,
        "updated_at": now_iso(),
    }

    if editing:
        store.update(DISCIPLINES, editing["id"], data)
        log_action(store, session, "update", "discipline", editing["id"], name,
                   diff(editing, data, AUDITED_FIELDS))
        return editing["id"]

    discipline_id = store.add(DISCIPLINES, {**data, "created_at": data["updated_at"]})
    log_action(store, session, "create", "discipline", discipline_id, name)
    return discipline_id


def delete_discipline(store: DocumentStore, discipline: Dict[str, Any], session: Optional[Session]) -> None:
    store.delete(DISCIPLINES, discipline["id"])
    log_action(store, session, "delete", "discipline", discipline["id"], discipline.get("name") or "")


def update_discipline_login(store: DocumentStore, discipline_id: str, field_name: str, value: str,
                            session: Optional[Session] = None) -> Dict[str, Any]:
    if field_name not in LOGIN_FIELDS:
        raise ValidationError(f"Field {field_name} cannot be edited here")
    before = store.get(DISCIPLINES, discipline_id)
    if before is None:
        raise NotFoundError("Discipline not found")
    after = store.update(DISCIPLINES, discipline_id, {
        field_name: (value or "").strip(),
        "updated_at": now_iso(),
    })
    log_action(store, session, "update", "discipline", discipline_id, before.get("name") or "",
               diff(before, after, (field_name,)))
    return after


def filter_disciplines(disciplines: List[Dict[str, Any]], search: str = "",
                       sort: str = "month") -> List[Dict[str, Any]]:
    """
    Case-insensitive search over name, course names and professor login.
    ``month`` sorts by the first month with blanks last; ``alphabetical``
    by name.
    """
    s = key(search)
    out = [
        d for d in disciplines
        if not s
        or s in key(d.get("name"))
        or any(s in key(cn) for cn in d.get("course_names") or [])
        or s in key(d.get("professor_login"))
    ]
    if sort == SORT_ALPHABETICAL:
        out.sort(key=lambda d: (d.get("name") or "").lower())
    else:
        out.sort(key=lambda d: (not d.get("month_1"), d.get("month_1") or 0, (d.get("name") or "").lower()))
    return out


def disciplines_for_courses(disciplines: List[Dict[str, Any]], course_ids: Iterable[str]) -> List[Dict[str, Any]]:
    wanted = set(course_ids)
    return [d for d in disciplines if wanted.intersection(d.get("course_ids") or [])]


def group_by_course(courses: List[Dict[str, Any]], disciplines: List[Dict[str, Any]]) -> List[tuple]:
    """``[(course, [disciplines linked to it]), ...]`` in course order."""
    by_course: Dict[str, List[Dict[str, Any]]] = {c["id"]: [] for c in courses}
    for d in disciplines:
        for cid in d.get("course_ids") or []:
            if cid in by_course:
                by_course[cid].append(d)
    return [(c, by_course[c["id"]]) for c in courses]
