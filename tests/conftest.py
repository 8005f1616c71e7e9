"""
Shared fixtures: a fresh in-memory database per test, the document store
on top of it, an admin session and small factories for seed documents.
"""
from typing import Any, Dict, Iterable, Optional

import pytest

from core.constants import (
    COURSES,
    DISCIPLINES,
    PEOPLE,
    ROLE_COORDINATOR,
    USER_TYPE_ADMIN,
)
from core.db import get_engine, init_db
from core.document_store import DocumentStore, now_iso
from core.session import Session


@pytest.fixture
def engine():
    """In-memory SQLite with the schema installed"""
    eng = get_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine) -> DocumentStore:
    return DocumentStore(engine)


@pytest.fixture
def admin_session() -> Session:
    return Session(USER_TYPE_ADMIN, {
        "id": "admin-1",
        "login": "admin",
        "email": "admin@example.com",
        "first_name": "Admin",
        "last_name": "",
    })


@pytest.fixture
def make_person(store):
    def _make(login: str, role: str = ROLE_COORDINATOR, first_name: Optional[str] = None,
              last_name: str = "Test", email: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
        data = {
            "role": role,
            "first_name": first_name or login.split(".")[0].title(),
            "last_name": last_name,
            "login": login,
            "email": email or f"{login}@example.com",
            "course_id": None,
            "course_name": None,
            "created_at": now_iso(),
            **extra,
        }
        data["id"] = store.add(PEOPLE, data)
        return data
    return _make


@pytest.fixture
def make_course(store):
    def _make(name: str, coordinator: Optional[Dict[str, Any]] = None,
              tutor: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        data = {
            "name": name,
            "coordinator_id": coordinator["id"] if coordinator else None,
            "coordinator_name": f"{coordinator['first_name']} {coordinator['last_name']}" if coordinator else None,
            "tutor_id": tutor["id"] if tutor else None,
            "tutor_name": f"{tutor['first_name']} {tutor['last_name']}" if tutor else None,
            "created_at": now_iso(),
        }
        data["id"] = store.add(COURSES, data)
        return data
    return _make


@pytest.fixture
def make_discipline(store):
    def _make(name: str, courses: Iterable[Dict[str, Any]] = (), **extra: Any) -> Dict[str, Any]:
        courses = list(courses)
        data = {
            "name": name,
            "course_ids": [c["id"] for c in courses],
            "course_names": [c["name"] for c in courses],
            "coordinator_login": "",
            "professor_login": "",
            "tutor_login": "",
            "month_1": None,
            "month_2": None,
            "created_at": now_iso(),
            "updated_at": now_iso(),
            **extra,
        }
        data["id"] = store.add(DISCIPLINES, data)
        return data
    return _make
