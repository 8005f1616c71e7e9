# -------------------------------------------------------------------
# screens/courses/importer.py
# Course spreadsheet import: template, preview and row-by-row reconcile.
# -------------------------------------------------------------------
from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping

import pandas as pd

from core.constants import COURSES, MAX_COURSES_PER_COORDINATOR, PEOPLE, ROLE_COORDINATOR
from core.document_store import DocumentStore, now_iso
from core.importing import ImportResult, cell, full_name, index_by, key, row_number
from screens.courses.constants import (
    COL_COORDINATOR_LOGIN,
    COL_NAME,
    COL_TUTOR_LOGIN,
    TEMPLATE_COLUMNS,
    TEMPLATE_ROWS,
)
from screens.courses.db import coordinator_course_counts

log = logging.getLogger(__name__)


def template_frame() -> pd.DataFrame:
    return pd.DataFrame(TEMPLATE_ROWS, columns=TEMPLATE_COLUMNS)


def preview_rows(store: DocumentStore, rows: List[Mapping[str, Any]]) -> pd.DataFrame:
    """The uploaded rows with the coordinator/tutor names they resolve to."""
    by_login = index_by(store.list(PEOPLE), "login")
    out = []
    for row in rows:
        coordinator = by_login.get(key(cell(row, COL_COORDINATOR_LOGIN)))
        tutor = by_login.get(key(cell(row, COL_TUTOR_LOGIN)))
        out.append({
            "Course": cell(row, COL_NAME),
            "Coordinator": full_name(coordinator) if coordinator else "Not found",
            "Tutor": full_name(tutor) if tutor else ("-" if not cell(row, COL_TUTOR_LOGIN) else "Not found"),
        })
    return pd.DataFrame(out, columns=["Course", "Coordinator", "Tutor"])


def import_courses(
    store: DocumentStore,
    rows: List[Mapping[str, Any]],
    coordinator_limit: int = MAX_COURSES_PER_COORDINATOR,
) -> ImportResult:
    """
    Create one course per row unless the name already exists. A row that
    fails never stops the batch, and rows see courses created by earlier
    rows (both for duplicate names and for the coordinator limit).
    """
    result = ImportResult()
    courses = store.list(COURSES)
    existing_names = {key(c.get("name")) for c in courses}
    load = coordinator_course_counts(courses)
    by_login = index_by(store.list(PEOPLE), "login")

    for i, row in enumerate(rows):
        n = row_number(i)
        try:
            name = cell(row, COL_NAME)
            coordinator_login = cell(row, COL_COORDINATOR_LOGIN)
            tutor_login = cell(row, COL_TUTOR_LOGIN)

            if not name or not coordinator_login:
                result.errors.append(f"Row {n}: course name and coordinator login are required")
                continue
            if key(name) in existing_names:
                result.ignored.append(f'Row {n}: course "{name}" already exists')
                continue

            coordinator = by_login.get(key(coordinator_login))
            if coordinator is None:
                result.errors.append(f'Row {n}: coordinator with login "{coordinator_login}" not found')
                continue
            if coordinator.get("role") != ROLE_COORDINATOR:
                result.errors.append(f'Row {n}: "{coordinator_login}" is not a {ROLE_COORDINATOR}')
                continue

            tutor = None
            if tutor_login:
                tutor = by_login.get(key(tutor_login))
                if tutor is None:
                    result.errors.append(f'Row {n}: tutor with login "{tutor_login}" not found')
                    continue

            if load.get(coordinator["id"], 0) >= coordinator_limit:
                result.errors.append(
                    f'Row {n}: coordinator "{coordinator_login}" already has {coordinator_limit} courses (maximum)'
                )
                continue

            store.add(COURSES, {
                "name": name,
                "coordinator_id": coordinator["id"],
                "coordinator_name": full_name(coordinator),
                "tutor_id": tutor["id"] if tutor else None,
                "tutor_name": full_name(tutor) if tutor else None,
                "created_at": now_iso(),
            })
            existing_names.add(key(name))
            load[coordinator["id"]] = load.get(coordinator["id"], 0) + 1
            result.created.append(f"Course: {name}")
        except Exception:
            log.error("Course import failed on row %s", n, exc_info=True)
            result.errors.append(f"Row {n}: failed to process")

    log.info("Course import finished: %s", result.summary())
    return result
