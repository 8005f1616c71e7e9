# -------------------------------------------------------------------
# screens/people/db.py
# Person documents: professors, coordinators, tutors.
# -------------------------------------------------------------------
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.audit import diff, log_action
from core.constants import COURSES, PEOPLE, PERSON_ROLES, ROLE_PROFESSOR, ROLE_TUTOR
from core.document_store import DocumentStore, now_iso
from core.errors import NotFoundError, ValidationError
from core.importing import full_name, key
from core.session import Session

AUDITED_FIELDS = ("role", "first_name", "last_name", "login", "email")


@dataclass
class PersonForm:
    role: str = ROLE_PROFESSOR
    first_name: str = ""
    last_name: str = ""
    login: str = ""
    email: str = ""
    password: str = ""
    course_id: str = ""


def normalize_person(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Older documents only carry ``nome``; split it into first/last name."""
    p = dict(doc)
    first = p.get("first_name") or ""
    last = p.get("last_name") or ""
    legacy = (p.get("nome") or "").strip()
    if legacy and (not first or not last):
        parts = legacy.split(" ")
        first = parts[0]
        last = " ".join(parts[1:])
    p["first_name"] = first
    p["last_name"] = last
    p.setdefault("login", "")
    p.setdefault("email", "")
    return p


def load_people(store: DocumentStore, role: Optional[str] = None) -> List[Dict[str, Any]]:
    people = [normalize_person(d) for d in store.list(PEOPLE)]
    if role:
        people = [p for p in people if p.get("role") == role]
    people.sort(key=lambda p: full_name(p).lower())
    return people


def validate_person(form: PersonForm, people: List[Dict[str, Any]],
                    editing: Optional[Dict[str, Any]] = None) -> None:
    if not (form.role and form.first_name.strip() and form.last_name.strip()
            and form.login.strip() and form.email.strip()):
        raise ValidationError("Fill in all required fields")
    if form.role not in PERSON_ROLES:
        raise ValidationError(f"Invalid role: {form.role}")
    if form.role == ROLE_TUTOR and not form.course_id:
        raise ValidationError("Select a course for the Tutor")
    if editing and key(form.login) != key(editing.get("login")):
        raise ValidationError("The login cannot be changed after registration")

    others = [p for p in people if not editing or p["id"] != editing["id"]]
    if any(key(p.get("login")) == key(form.login) for p in others):
        raise ValidationError(f'Login "{form.login.strip()}" already exists')
    if any(key(p.get("email")) == key(form.email) for p in others):
        raise ValidationError(f'Email "{form.email.strip()}" already exists')


def save_person(store: DocumentStore, form: PersonForm, session: Optional[Session],
                editing: Optional[Dict[str, Any]] = None) -> str:
    """Validate and write a person; returns its id."""
    people = load_people(store)
    validate_person(form, people, editing)

    data: Dict[str, Any] = {
        "role": form.role,
        "first_name": form.first_name.strip(),
        "last_name": form.last_name.strip(),
        "login": form.login.strip(),
        "email": form.email.strip(),
        "course_id": None,
        "course_name": None,
    }
    # Professors never sign in, so they carry no password
    if form.role != ROLE_PROFESSOR:
        data["password"] = form.password or form.login.strip()
    # Coordinators are linked to courses from the course side
    if form.role == ROLE_TUTOR:
        course = store.get(COURSES, form.course_id)
        if course is None:
            raise NotFoundError("Selected course no longer exists")
        data["course_id"] = course["id"]
        data["course_name"] = course.get("name") or ""

    name = f"{data['first_name']} {data['last_name']}"
    if editing:
        store.update(PEOPLE, editing["id"], data)
        log_action(store, session, "update", "person", editing["id"], name,
                   diff(editing, data, AUDITED_FIELDS))
        return editing["id"]

    person_id = store.add(PEOPLE, {**data, "created_at": now_iso()})
    log_action(store, session, "create", "person", person_id, name)
    return person_id


def delete_person(store: DocumentStore, person: Dict[str, Any], session: Optional[Session]) -> None:
    store.delete(PEOPLE, person["id"])
    log_action(store, session, "delete", "person", person["id"], full_name(person))


def filter_people(people: List[Dict[str, Any]], role: str = "all", search: str = "") -> List[Dict[str, Any]]:
    out = people if role in ("", "all", None) else [p for p in people if p.get("role") == role]
    s = key(search)
    if not s:
        return list(out)
    return [
        p for p in out
        if s in key(p.get("first_name")) or s in key(p.get("last_name"))
        or s in key(p.get("email")) or s in key(p.get("login"))
        or s in key(p.get("course_name"))
    ]


def people_stats(people: List[Dict[str, Any]]) -> Dict[str, int]:
    stats = {"total": len(people)}
    for role in PERSON_ROLES:
        stats[role] = sum(1 for p in people if p.get("role") == role)
    return stats
