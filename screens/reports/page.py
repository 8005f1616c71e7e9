# screens/reports/page.py
from __future__ import annotations
from datetime import date
from typing import Callable, List, Tuple

import pandas as pd
import streamlit as st

from core.errors import AdminError
from core.forms import handle_error
from core.policy import PAGE_REPORTS, require_page
from core.runtime import get_store
from core.spreadsheets import EXCEL_MIME, frame_to_xlsx, write_workbook
from screens.reports import exports

MONTHS = list(range(1, 13))


def _build(key: str, builder: Callable[[], bytes]):
    """Build a report into session_state so the download button survives the rerun."""
    try:
        st.session_state[key] = builder()
    except AdminError as e:
        st.session_state.pop(key, None)
        st.error(str(e))
    except Exception as e:
        st.session_state.pop(key, None)
        handle_error(e, "Could not generate the report.")


def _single_sheet(frame: Callable[[], pd.DataFrame], sheet: str) -> Callable[[], bytes]:
    return lambda: frame_to_xlsx(frame(), sheet)


def _report_card(title: str, caption: str, key: str, builder: Callable[[], bytes], file_name: str):
    with st.container(border=True):
        st.markdown(f"**{title}**")
        st.caption(caption)
        if st.button("Generate", key=f"{key}_build"):
            _build(key, builder)
        data = st.session_state.get(key)
        if data:
            st.download_button("⬇️ Download .xlsx", data=data, file_name=file_name,
                               mime=EXCEL_MIME, key=f"{key}_dl")


@require_page(PAGE_REPORTS)
def render():
    st.title("📊 Reports")
    store = get_store()
    today = date.today().isoformat()

    cards: List[Tuple[str, str, str, Callable[[], bytes], str]] = [
        ("Courses", "Every course with its coordinator and tutor.", "rep_courses",
         _single_sheet(lambda: exports.courses_frame(store), "Cursos"), "cursos.xlsx"),
        ("Disciplines", "Every discipline with its courses, people and months.", "rep_disciplines",
         _single_sheet(lambda: exports.disciplines_frame(store), "Disciplinas"), "disciplinas.xlsx"),
        ("Professors by discipline", "Professor login per discipline.", "rep_professors",
         _single_sheet(lambda: exports.professors_frame(store), "Professores"), "professores-por-disciplina.xlsx"),
        ("Coordinators", "Coordinators per course and per discipline.", "rep_coordinators",
         _single_sheet(lambda: exports.coordinators_frame(store), "Coordenadores"), "coordenadores.xlsx"),
        ("People", "Everyone registered, in the import template layout.", "rep_people",
         _single_sheet(lambda: exports.people_frame(store), "Pessoas"), "pessoas.xlsx"),
        ("Full report", "Courses, disciplines and a summary per period.", "rep_full",
         lambda: write_workbook(exports.full_report(store)), f"relatorio-completo-{today}.xlsx"),
    ]

    cols = st.columns(2)
    for i, (title, caption, key, builder, file_name) in enumerate(cards):
        with cols[i % 2]:
            _report_card(title, caption, key, builder, file_name)

    st.markdown("### Disciplines by period")
    c1, c2 = st.columns(2)
    start = c1.selectbox("From month", MONTHS, index=0, key="rep_period_start")
    end = c2.selectbox("To month", MONTHS, index=11, key="rep_period_end")
    _report_card(
        "Disciplines in period",
        "Disciplines whose first or second month falls in the range.",
        "rep_period",
        _single_sheet(lambda: exports.disciplines_by_period(store, start, end), "Disciplinas"),
        f"disciplinas-{start:02d}-a-{end:02d}.xlsx",
    )
