# core/ui.py
"""Widgets shared by the course, discipline and people import tabs."""
from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import pandas as pd
import streamlit as st

from core.errors import AdminError
from core.forms import handle_error
from core.importing import ImportResult
from core.spreadsheets import EXCEL_MIME, SHEET_TYPES, frame_to_xlsx, read_sheet, require_columns

Rows = List[Dict[str, str]]


def upload_key(key_prefix: str) -> str:
    """Widget key of the uploader; it changes after every confirm or cancel so the widget starts empty."""
    round_no = st.session_state.get(f"{key_prefix}_upload_round", 0)
    return f"{key_prefix}_upload_{round_no}"


def clear_import(key_prefix: str) -> None:
    """Drop the parsed rows and reset the uploader."""
    for suffix in ("rows", "file_name", "file_id"):
        st.session_state.pop(f"{key_prefix}_{suffix}", None)
    round_key = f"{key_prefix}_upload_round"
    st.session_state[round_key] = st.session_state.get(round_key, 0) + 1


def xlsx_download_button(label: str, df: pd.DataFrame, file_name: str, sheet_name: str, key: str):
    st.download_button(
        label=label,
        data=frame_to_xlsx(df, sheet_name),
        file_name=file_name,
        mime=EXCEL_MIME,
        key=key,
    )


def render_import_result(result: ImportResult):
    c1, c2, c3 = st.columns(3)
    c1.metric("Created", len(result.created))
    c2.metric("Ignored", len(result.ignored))
    c3.metric("Errors", len(result.errors))
    for title, items in (("Created", result.created), ("Ignored", result.ignored), ("Errors", result.errors)):
        if items:
            with st.expander(f"{title} ({len(items)})", expanded=(title == "Errors")):
                st.markdown("\n".join(f"- {m}" for m in items))


def render_import_section(
    key_prefix: str,
    template_df: pd.DataFrame,
    template_file_name: str,
    required_columns: Sequence[str],
    preview: Callable[[Rows], pd.DataFrame],
    run_import: Callable[[Rows, str], ImportResult],
    help_text: str = "",
):
    """
    Template download, upload, preview and confirm. Parsed rows are kept in
    session_state between reruns until the import is confirmed or cancelled.
    """
    rows_key = f"{key_prefix}_rows"
    name_key = f"{key_prefix}_file_name"
    file_id_key = f"{key_prefix}_file_id"
    result_key = f"{key_prefix}_result"

    if help_text:
        st.caption(help_text)
    xlsx_download_button("⬇️ Download template", template_df, template_file_name,
                         "Modelo", key=f"{key_prefix}_template")

    uploaded = st.file_uploader(
        "Spreadsheet (.xlsx or .csv)",
        type=list(SHEET_TYPES),
        key=upload_key(key_prefix),
    )
    if uploaded is not None and st.session_state.get(file_id_key) != uploaded.file_id:
        try:
            rows = read_sheet(uploaded, uploaded.name)
            require_columns(rows, required_columns)
            st.session_state[rows_key] = rows
            st.session_state[name_key] = uploaded.name
            st.session_state[file_id_key] = uploaded.file_id
            st.session_state.pop(result_key, None)
        except AdminError as e:
            st.error(str(e))
        except Exception as e:
            handle_error(e, "Could not read the spreadsheet.")

    rows: Optional[Rows] = st.session_state.get(rows_key)
    if rows:
        st.markdown(f"**Preview** · {len(rows)} row(s) from `{st.session_state.get(name_key)}`")
        try:
            st.dataframe(preview(rows), use_container_width=True, hide_index=True)
        except Exception as e:
            handle_error(e, "Could not build the preview.")

        c1, c2 = st.columns(2)
        if c1.button("✅ Confirm import", type="primary", key=f"{key_prefix}_confirm"):
            try:
                with st.spinner("Importing..."):
                    result = run_import(rows, st.session_state.get(name_key) or "")
            except Exception as e:
                handle_error(e, "The import could not be completed.")
            else:
                st.session_state[result_key] = result
                clear_import(key_prefix)
                st.rerun()
        if c2.button("Cancel", key=f"{key_prefix}_cancel"):
            clear_import(key_prefix)
            st.rerun()

    result: Optional[ImportResult] = st.session_state.get(result_key)
    if result is not None:
        st.markdown("#### Import result")
        render_import_result(result)


def options_with_blank(docs: Sequence[Mapping[str, Any]], label: Callable[[Mapping[str, Any]], str]) -> Dict[str, str]:
    """``{"": "-", id: label, ...}`` for a selectbox where no selection is allowed."""
    out = {"": "-"}
    out.update({d["id"]: label(d) for d in docs})
    return out
