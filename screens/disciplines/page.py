# screens/disciplines/page.py
from __future__ import annotations
from typing import Any, Dict, Optional

import streamlit as st

from core.constants import DISCIPLINES
from core.errors import AdminError
from core.forms import handle_error, success
from core.policy import PAGE_DISCIPLINES, require_page
from core.runtime import get_settings, get_store
from core.session import current_session
from core.ui import render_import_section
from screens.courses.db import load_courses
from screens.disciplines.constants import MONTH_OPTIONS, REQUIRED_COLUMNS, SORT_OPTIONS, TEMPLATE_FILE_NAME
from screens.disciplines.db import (
    DisciplineForm,
    delete_discipline,
    filter_disciplines,
    format_month,
    load_disciplines,
    save_discipline,
)
from screens.disciplines.importer import (
    import_disciplines,
    preview_rows,
    record_upload,
    template_frame,
    upload_history,
)

EDIT_KEY = "disciplines_editing_id"


def _month_select(container, label: str, current: Any, key: str):
    return container.selectbox(
        label, MONTH_OPTIONS,
        index=MONTH_OPTIONS.index(current) if current in MONTH_OPTIONS else 0,
        format_func=lambda m: format_month(m) or "-",
        key=key,
    )


def _discipline_form(store, limit: int, editing: Optional[Dict[str, Any]]):
    courses = load_courses(store)
    course_opts = {c["id"]: c.get("name") or c["id"] for c in courses}
    e = editing or {}

    with st.form("discipline_form", clear_on_submit=not editing):
        st.subheader("Edit discipline" if editing else "New discipline")
        name = st.text_input("Discipline name *", value=e.get("name", ""))
        course_ids = st.multiselect(
            f"Courses * (max {limit})", options=list(course_opts), format_func=lambda k: course_opts[k],
            default=[cid for cid in e.get("course_ids") or [] if cid in course_opts],
        )
        c1, c2, c3 = st.columns(3)
        coordinator_login = c1.text_input("Coordinator login", value=e.get("coordinator_login") or "")
        professor_login = c2.text_input("Professor login", value=e.get("professor_login") or "")
        tutor_login = c3.text_input("Tutor login", value=e.get("tutor_login") or "")
        m1, m2 = st.columns(2)
        month_1 = _month_select(m1, "Month 1", e.get("month_1"), f"disc_month_1_{e.get('id', 'new')}")
        month_2 = _month_select(m2, "Month 2", e.get("month_2"), f"disc_month_2_{e.get('id', 'new')}")
        b1, b2 = st.columns(2)
        submitted = b1.form_submit_button("💾 Save", type="primary")
        cancelled = b2.form_submit_button("Cancel") if editing else False

    if cancelled:
        st.session_state.pop(EDIT_KEY, None)
        st.rerun()
    if not submitted:
        return

    form = DisciplineForm(
        name=name,
        course_ids=course_ids,
        coordinator_login=coordinator_login,
        professor_login=professor_login,
        tutor_login=tutor_login,
        month_1=month_1,
        month_2=month_2,
    )
    try:
        save_discipline(store, form, current_session(), editing, limit=limit)
    except AdminError as e:
        st.error(str(e))
        return
    except Exception as e:
        handle_error(e, "Could not save the discipline.")
        return
    st.session_state.pop(EDIT_KEY, None)
    success("Discipline updated." if editing else "Discipline created.")


def _discipline_list(store):
    c1, c2 = st.columns([3, 1])
    search = c1.text_input("Search", placeholder="Name, course or professor login", key="disc_search")
    sort = c2.selectbox("Sort", options=list(SORT_OPTIONS), format_func=lambda k: SORT_OPTIONS[k], key="disc_sort")

    disciplines = filter_disciplines(load_disciplines(store), search, sort)
    if not disciplines:
        st.info("No disciplines found.")
        return

    for d in disciplines:
        with st.container(border=True):
            a, b, c = st.columns([5, 1, 1])
            a.markdown(f"**{d.get('name')}**")
            a.caption(" · ".join(n for n in d.get("course_names") or [] if n) or "No courses")
            months = ", ".join(m for m in (format_month(d.get("month_1")), format_month(d.get("month_2"))) if m)
            a.caption(
                f"Professor: {d.get('professor_login') or '-'} · Tutor: {d.get('tutor_login') or '-'}"
                f" · Coordinator: {d.get('coordinator_login') or '-'} · Months: {months or '-'}"
            )
            if b.button("✏️ Edit", key=f"disc_edit_{d['id']}"):
                st.session_state[EDIT_KEY] = d["id"]
                st.rerun()
            if c.button("🗑️ Delete", key=f"disc_del_{d['id']}"):
                try:
                    delete_discipline(store, d, current_session())
                except Exception as e:
                    handle_error(e, "Could not delete the discipline.")
                else:
                    st.session_state.pop(EDIT_KEY, None)
                    st.rerun()


def _run_import(store, rows, file_name: str, limit: int):
    result = import_disciplines(store, rows, limit)
    session = current_session()
    record_upload(store, file_name, session.login if session else "admin", len(result.created))
    return result


@require_page(PAGE_DISCIPLINES)
def render():
    st.title("📘 Disciplines")
    store = get_store()
    limit = get_settings().limits.max_courses_per_discipline

    tab_manage, tab_import, tab_history = st.tabs(["Manage", "Import", "Upload history"])
    with tab_manage:
        editing = None
        editing_id = st.session_state.get(EDIT_KEY)
        if editing_id:
            editing = store.get(DISCIPLINES, editing_id)
        col_form, col_list = st.columns([2, 3])
        with col_form:
            _discipline_form(store, limit, editing)
        with col_list:
            _discipline_list(store)

    with tab_import:
        render_import_section(
            key_prefix="disciplines_import",
            template_df=template_frame(),
            template_file_name=TEMPLATE_FILE_NAME,
            required_columns=REQUIRED_COLUMNS,
            preview=lambda rows: preview_rows(store, rows),
            run_import=lambda rows, name: _run_import(store, rows, name, limit),
            help_text=(
                "Columns: Curso and Disciplina (required); Login Coordenador, Login Professor, "
                "Login Tutor, Mês 1 and Mês 2 (optional). An existing discipline is linked to the "
                "row's course instead of duplicated."
            ),
        )

    with tab_history:
        entries = upload_history(store)
        if not entries:
            st.info("No uploads yet.")
        else:
            st.dataframe(
                [{
                    "File": e.get("file_name"),
                    "Uploaded by": e.get("uploaded_by"),
                    "Uploaded at": e.get("uploaded_at"),
                    "Records": e.get("records_count"),
                    "Month": e.get("month"),
                } for e in entries],
                use_container_width=True, hide_index=True,
            )
