# core/policy.py
"""Which pages each kind of signed-in user may open."""
from __future__ import annotations
import functools
from typing import Callable, Dict, List, Optional, Set

import streamlit as st

from core.constants import USER_TYPE_ADMIN, USER_TYPE_COORDINATOR
from core.session import Session, current_session

PAGE_OVERVIEW = "Overview"
PAGE_COURSES = "Courses"
PAGE_DISCIPLINES = "Disciplines"
PAGE_PEOPLE = "People"
PAGE_REPORTS = "Reports"
PAGE_COORDINATOR = "My Disciplines"

# Page order here is the navigation order
PAGE_ACCESS: Dict[str, Set[str]] = {
    PAGE_OVERVIEW: {USER_TYPE_ADMIN},
    PAGE_COURSES: {USER_TYPE_ADMIN},
    PAGE_DISCIPLINES: {USER_TYPE_ADMIN},
    PAGE_PEOPLE: {USER_TYPE_ADMIN},
    PAGE_REPORTS: {USER_TYPE_ADMIN},
    PAGE_COORDINATOR: {USER_TYPE_COORDINATOR},
}


def can_view_page(page_name: str, session: Optional[Session]) -> bool:
    if session is None:
        return False
    return session.user_type in PAGE_ACCESS.get(page_name, set())


def visible_pages_for(session: Optional[Session]) -> List[str]:
    return [p for p in PAGE_ACCESS if can_view_page(p, session)]


def require_page(page_name: str):
    def _wrap(fn: Callable):
        @functools.wraps(fn)
        def _inner(*args, **kwargs):
            if not can_view_page(page_name, current_session()):
                st.error("Access Denied. You don't have permission to view this page.")
                st.stop()
            return fn(*args, **kwargs)
        return _inner
    return _wrap
