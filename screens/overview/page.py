# screens/overview/page.py
from __future__ import annotations

import streamlit as st

from core.constants import PEOPLE
from core.errors import AdminError
from core.forms import handle_error
from core.policy import PAGE_OVERVIEW, require_page
from core.runtime import get_store
from core.session import current_session
from screens.courses.db import load_courses
from screens.disciplines.constants import LOGIN_FIELDS, SORT_OPTIONS
from screens.disciplines.db import (
    filter_disciplines,
    format_month,
    group_by_course,
    load_disciplines,
    update_discipline_login,
)

LOGIN_LABELS = {
    "coordinator_login": "Coordinator",
    "professor_login": "Professor",
    "tutor_login": "Tutor",
}


def _commit_login(store, discipline_id: str, field_name: str, key: str):
    # runs only for the editor the user changed
    try:
        update_discipline_login(store, discipline_id, field_name, st.session_state.get(key) or "",
                                current_session())
        st.toast("Login updated.")
    except AdminError as e:
        st.error(str(e))
    except Exception as e:
        handle_error(e, "Could not update the login.")


def _login_editor(store, discipline, field_name: str, key_prefix: str):
    key = f"{key_prefix}_{field_name}"
    st.text_input(
        LOGIN_LABELS[field_name],
        value=discipline.get(field_name) or "",
        placeholder="Not assigned",
        key=key,
        on_change=_commit_login,
        args=(store, discipline["id"], field_name, key),
    )


@require_page(PAGE_OVERVIEW)
def render():
    st.title("🏠 Overview")
    store = get_store()

    courses = load_courses(store)
    disciplines = load_disciplines(store)
    c1, c2, c3 = st.columns(3)
    c1.metric("Courses", len(courses))
    c2.metric("Disciplines", len(disciplines))
    c3.metric("People", store.count(PEOPLE))

    s1, s2 = st.columns([3, 1])
    search = s1.text_input("Search disciplines", placeholder="Name, course or professor login", key="ov_search")
    sort = s2.selectbox("Sort", options=list(SORT_OPTIONS), format_func=lambda k: SORT_OPTIONS[k], key="ov_sort")

    if not courses:
        st.info("No courses registered yet.")
        return

    shown = filter_disciplines(disciplines, search, sort)
    for course, linked in group_by_course(courses, shown):
        if search and not linked:
            continue
        header = f"**{course.get('name')}** · {len(linked)} discipline(s)"
        with st.expander(header, expanded=bool(search)):
            st.caption(
                f"Coordinator: {course.get('coordinator_name') or '-'} · Tutor: {course.get('tutor_name') or '-'}"
            )
            if not linked:
                st.caption("No disciplines linked.")
            for d in linked:
                months = ", ".join(m for m in (format_month(d.get("month_1")), format_month(d.get("month_2"))) if m)
                st.markdown(f"**{d.get('name')}** · months: {months or '-'}")
                cols = st.columns(len(LOGIN_FIELDS))
                for col, field_name in zip(cols, LOGIN_FIELDS):
                    with col:
                        _login_editor(store, d, field_name, f"ov_{course['id']}_{d['id']}")
