# screens/courses/page.py
from __future__ import annotations
from typing import Any, Dict, Optional

import streamlit as st

from core.constants import COURSES, ROLE_COORDINATOR, ROLE_TUTOR
from core.errors import AdminError
from core.forms import handle_error, success, warn
from core.importing import full_name
from core.policy import PAGE_COURSES, require_page
from core.runtime import get_settings, get_store
from core.session import current_session
from core.ui import options_with_blank, render_import_section
from screens.courses.constants import REQUIRED_COLUMNS, TEMPLATE_FILE_NAME
from screens.courses.db import (
    CourseForm,
    coordinator_course_counts,
    delete_course,
    load_courses,
    save_course,
)
from screens.courses.importer import import_courses, preview_rows, template_frame
from screens.courses.linking import linked_discipline_ids
from screens.disciplines.db import load_disciplines
from screens.people.db import load_people

EDIT_KEY = "courses_editing_id"


def _course_form(store, limits, editing: Optional[Dict[str, Any]]):
    coordinators = load_people(store, ROLE_COORDINATOR)
    tutors = load_people(store, ROLE_TUTOR)
    disciplines = load_disciplines(store)
    counts = coordinator_course_counts(load_courses(store))

    coord_opts = options_with_blank(
        coordinators,
        lambda p: f"{full_name(p)} ({counts.get(p['id'], 0)}/{limits.max_courses_per_coordinator})",
    )
    tutor_opts = options_with_blank(tutors, full_name)
    disc_opts = {d["id"]: d.get("name") or d["id"] for d in disciplines}

    current_coord = (editing or {}).get("coordinator_id") or ""
    current_tutor = (editing or {}).get("tutor_id") or ""
    current_discs = sorted(linked_discipline_ids(store, editing["id"])) if editing else []

    with st.form("course_form", clear_on_submit=not editing):
        st.subheader("Edit course" if editing else "New course")
        name = st.text_input("Course name *", value=(editing or {}).get("name", ""))
        coordinator_id = st.selectbox(
            "Coordinator", options=list(coord_opts), format_func=lambda k: coord_opts[k],
            index=list(coord_opts).index(current_coord) if current_coord in coord_opts else 0,
        )
        tutor_id = st.selectbox(
            "Tutor", options=list(tutor_opts), format_func=lambda k: tutor_opts[k],
            index=list(tutor_opts).index(current_tutor) if current_tutor in tutor_opts else 0,
        )
        discipline_ids = st.multiselect(
            "Disciplines", options=list(disc_opts), format_func=lambda k: disc_opts[k],
            default=[d for d in current_discs if d in disc_opts],
        )
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("💾 Save", type="primary")
        cancelled = c2.form_submit_button("Cancel") if editing else False

    if cancelled:
        st.session_state.pop(EDIT_KEY, None)
        st.rerun()
    if not submitted:
        return

    form = CourseForm(
        name=name,
        coordinator_id=coordinator_id or None,
        tutor_id=tutor_id or None,
        discipline_ids=discipline_ids,
    )
    try:
        _, result = save_course(
            store, form, current_session(), editing,
            coordinator_limit=limits.max_courses_per_coordinator,
            discipline_limit=limits.max_courses_per_discipline,
        )
    except AdminError as e:
        st.error(str(e))
        return
    except Exception as e:
        handle_error(e, "Could not save the course.")
        return

    for w in result.warnings:
        warn(w)
    if result.failures:
        warn("Some disciplines could not be updated. Please review the links.")
    st.session_state.pop(EDIT_KEY, None)
    success("Course updated." if editing else "Course created.")


def _course_list(store):
    courses = load_courses(store)
    if not courses:
        st.info("No courses registered yet.")
        return

    for c in courses:
        with st.container(border=True):
            c1, c2, c3 = st.columns([5, 1, 1])
            c1.markdown(f"**{c.get('name')}**")
            c1.caption(
                f"Coordinator: {c.get('coordinator_name') or '-'} · Tutor: {c.get('tutor_name') or '-'}"
            )
            if c2.button("✏️ Edit", key=f"course_edit_{c['id']}"):
                st.session_state[EDIT_KEY] = c["id"]
                st.rerun()
            if c3.button("🗑️ Delete", key=f"course_del_{c['id']}"):
                st.session_state["courses_confirm_delete"] = c["id"]

            if st.session_state.get("courses_confirm_delete") == c["id"]:
                st.warning(f"Delete course **{c.get('name')}**? Disciplines keep their links.")
                d1, d2 = st.columns(2)
                if d1.button("Yes, delete", type="primary", key=f"course_del_yes_{c['id']}"):
                    try:
                        delete_course(store, c, current_session())
                    except Exception as e:
                        handle_error(e, "Could not delete the course.")
                    else:
                        st.session_state.pop("courses_confirm_delete", None)
                        st.session_state.pop(EDIT_KEY, None)
                        st.rerun()
                if d2.button("No", key=f"course_del_no_{c['id']}"):
                    st.session_state.pop("courses_confirm_delete", None)
                    st.rerun()


@require_page(PAGE_COURSES)
def render():
    st.title("📚 Courses")
    store = get_store()
    limits = get_settings().limits

    tab_manage, tab_import = st.tabs(["Manage", "Import"])
    with tab_manage:
        editing = None
        editing_id = st.session_state.get(EDIT_KEY)
        if editing_id:
            editing = store.get(COURSES, editing_id)
        col_form, col_list = st.columns([2, 3])
        with col_form:
            _course_form(store, limits, editing)
        with col_list:
            _course_list(store)

    with tab_import:
        render_import_section(
            key_prefix="courses_import",
            template_df=template_frame(),
            template_file_name=TEMPLATE_FILE_NAME,
            required_columns=REQUIRED_COLUMNS,
            preview=lambda rows: preview_rows(store, rows),
            run_import=lambda rows, _name: import_courses(store, rows, limits.max_courses_per_coordinator),
            help_text=(
                "Columns: Nome do Curso and Login do Coordenador (required), Login do Tutor (optional). "
                "Existing course names are ignored."
            ),
        )
