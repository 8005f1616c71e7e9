# screens/people/page.py
from __future__ import annotations
from typing import Any, Dict, Optional

import streamlit as st

from core.constants import PEOPLE, PERSON_ROLES, ROLE_PROFESSOR, ROLE_TUTOR
from core.errors import AdminError
from core.forms import handle_error, success
from core.importing import full_name
from core.policy import PAGE_PEOPLE, require_page
from core.runtime import get_store
from core.session import current_session
from core.ui import render_import_section
from screens.courses.db import load_courses
from screens.people.constants import REQUIRED_COLUMNS, ROLE_FILTER_ALL, TEMPLATE_FILE_NAME
from screens.people.db import (
    PersonForm,
    delete_person,
    filter_people,
    load_people,
    normalize_person,
    people_stats,
    save_person,
)
from screens.people.importer import import_people, preview_rows, template_frame

EDIT_KEY = "people_editing_id"


def _person_form(store, editing: Optional[Dict[str, Any]]):
    e = editing or {}
    courses = load_courses(store)
    course_opts = {"": "-"}
    course_opts.update({c["id"]: c.get("name") or c["id"] for c in courses})

    # role drives which fields apply, so it sits outside the form
    role = st.selectbox(
        "Role *", PERSON_ROLES,
        index=PERSON_ROLES.index(e["role"]) if e.get("role") in PERSON_ROLES else 0,
        key=f"person_role_{e.get('id', 'new')}",
    )
    with st.form("person_form", clear_on_submit=not editing):
        st.subheader("Edit person" if editing else "New person")
        c1, c2 = st.columns(2)
        first_name = c1.text_input("First name *", value=e.get("first_name", ""))
        last_name = c2.text_input("Last name *", value=e.get("last_name", ""))
        email = st.text_input("Email *", value=e.get("email", ""))
        login = st.text_input("Login *", value=e.get("login", ""), disabled=bool(editing))
        password = ""
        if role != ROLE_PROFESSOR:
            password = st.text_input(
                "Password", type="password",
                help="Leave blank to use the login as password.",
            )
        course_id = ""
        if role == ROLE_TUTOR:
            current = e.get("course_id") or ""
            course_id = st.selectbox(
                "Course *", options=list(course_opts), format_func=lambda k: course_opts[k],
                index=list(course_opts).index(current) if current in course_opts else 0,
            )
        b1, b2 = st.columns(2)
        submitted = b1.form_submit_button("💾 Save", type="primary")
        cancelled = b2.form_submit_button("Cancel") if editing else False

    if cancelled:
        st.session_state.pop(EDIT_KEY, None)
        st.rerun()
    if not submitted:
        return

    form = PersonForm(
        role=role,
        first_name=first_name,
        last_name=last_name,
        login=e.get("login", "") if editing else login,
        email=email,
        password=password or e.get("password") or "",
        course_id=course_id,
    )
    try:
        save_person(store, form, current_session(), editing)
    except AdminError as err:
        st.error(str(err))
        return
    except Exception as err:
        handle_error(err, "Could not save the person.")
        return
    st.session_state.pop(EDIT_KEY, None)
    success("Person updated." if editing else "Person created.")


def _people_list(store):
    people = load_people(store)
    stats = people_stats(people)
    cols = st.columns(len(PERSON_ROLES) + 1)
    cols[0].metric("Total", stats["total"])
    for col, role in zip(cols[1:], PERSON_ROLES):
        col.metric(role, stats[role])

    c1, c2 = st.columns([1, 3])
    role_filter = c1.selectbox("Role", [ROLE_FILTER_ALL] + PERSON_ROLES, key="people_role_filter")
    search = c2.text_input("Search", placeholder="Name, email, login or course", key="people_search")

    shown = filter_people(people, role_filter, search)
    if not shown:
        st.info("No people found.")
        return

    for p in shown:
        with st.container(border=True):
            a, b, c = st.columns([5, 1, 1])
            a.markdown(f"**{full_name(p)}** · {p.get('role')}")
            extra = f" · Course: {p['course_name']}" if p.get("course_name") else ""
            a.caption(f"{p.get('email')} · login: {p.get('login')}{extra}")
            if b.button("✏️ Edit", key=f"person_edit_{p['id']}"):
                st.session_state[EDIT_KEY] = p["id"]
                st.rerun()
            if c.button("🗑️ Delete", key=f"person_del_{p['id']}"):
                try:
                    delete_person(store, p, current_session())
                except Exception as err:
                    handle_error(err, "Could not delete the person.")
                else:
                    st.session_state.pop(EDIT_KEY, None)
                    st.rerun()


@require_page(PAGE_PEOPLE)
def render():
    st.title("👥 People")
    store = get_store()

    tab_manage, tab_import = st.tabs(["Manage", "Import"])
    with tab_manage:
        editing = None
        editing_id = st.session_state.get(EDIT_KEY)
        if editing_id:
            doc = store.get(PEOPLE, editing_id)
            editing = normalize_person(doc) if doc else None
        col_form, col_list = st.columns([2, 3])
        with col_form:
            _person_form(store, editing)
        with col_list:
            _people_list(store)

    with tab_import:
        render_import_section(
            key_prefix="people_import",
            template_df=template_frame(),
            template_file_name=TEMPLATE_FILE_NAME,
            required_columns=REQUIRED_COLUMNS,
            preview=lambda rows: preview_rows(store, rows),
            run_import=lambda rows, _name: import_people(store, rows),
            help_text=(
                "Columns: Tipo, First Name, Last Name, Email, Login (required) and Curso (Tutors). "
                "Tipo must be Professor, Coordenador, Tutor or Administrador. "
                "The login is used as initial password."
            ),
        )
