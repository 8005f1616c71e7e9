# -------------------------------------------------------------------
# screens/disciplines/importer.py
# Discipline spreadsheet import. A row either creates a discipline or,
# when a discipline with that name exists, links it to one more course.
# -------------------------------------------------------------------
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from core.constants import COURSES, DISCIPLINES, MAX_COURSES_PER_DISCIPLINE, PEOPLE, UPLOAD_HISTORY
from core.document_store import DocumentStore, now_iso
from core.errors import ValidationError
from core.importing import ImportResult, cell, index_by, key, row_number
from screens.courses.linking import attach_course
from screens.disciplines.constants import (
    COL_COORDINATOR_LOGIN,
    COL_COURSE,
    COL_MONTH_1,
    COL_MONTH_2,
    COL_NAME,
    COL_PROFESSOR_LOGIN,
    COL_TUTOR_LOGIN,
    TEMPLATE_COLUMNS,
    TEMPLATE_ROWS,
)
from screens.disciplines.db import parse_month

log = logging.getLogger(__name__)

_LOGIN_COLUMNS = (
    (COL_COORDINATOR_LOGIN, "coordinator_login"),
    (COL_PROFESSOR_LOGIN, "professor_login"),
    (COL_TUTOR_LOGIN, "tutor_login"),
)


def template_frame() -> pd.DataFrame:
    return pd.DataFrame(TEMPLATE_ROWS, columns=TEMPLATE_COLUMNS)


def preview_rows(store: DocumentStore, rows: List[Mapping[str, Any]]) -> pd.DataFrame:
    """Uploaded rows flagged with whether their course and discipline already exist."""
    courses = index_by(store.list(COURSES), "name")
    disciplines = index_by(store.list(DISCIPLINES), "name")
    out = []
    for row in rows:
        course = cell(row, COL_COURSE)
        name = cell(row, COL_NAME)
        out.append({
            "Course": course,
            "Discipline": name,
            "Course found": "yes" if key(course) in courses else "no",
            "Discipline exists": "yes" if key(name) in disciplines else "no",
            COL_MONTH_1: cell(row, COL_MONTH_1),
            COL_MONTH_2: cell(row, COL_MONTH_2),
        })
    return pd.DataFrame(out)


def import_disciplines(
    store: DocumentStore,
    rows: List[Mapping[str, Any]],
    limit: int = MAX_COURSES_PER_DISCIPLINE,
) -> ImportResult:
    """
    Reconcile each row against the disciplines collection, in order:
    an existing discipline already linked to the row's course is ignored,
    an existing one not yet linked gains the course (unless it is at
    ``limit``), anything else is created with that single course.
    """
    result = ImportResult()
    courses = index_by(store.list(COURSES), "name")
    disciplines = index_by(store.list(DISCIPLINES), "name")
    logins = {key(p.get("login")) for p in store.list(PEOPLE) if p.get("login")}

    for i, row in enumerate(rows):
        n = row_number(i)
        try:
            course_name = cell(row, COL_COURSE)
            name = cell(row, COL_NAME)
            if not course_name or not name:
                result.errors.append(f"Row {n}: course and discipline are required")
                continue

            course = courses.get(key(course_name))
            if course is None:
                result.errors.append(f'Row {n}: course "{course_name}" not found')
                continue

            person_logins: Dict[str, str] = {}
            unknown: Optional[str] = None
            for column, attr in _LOGIN_COLUMNS:
                value = cell(row, column)
                if value and key(value) not in logins:
                    unknown = value
                    break
                person_logins[attr] = value
            if unknown is not None:
                result.errors.append(f'Row {n}: login "{unknown}" not found')
                continue

            try:
                month_1 = parse_month(row.get(COL_MONTH_1))
                month_2 = parse_month(row.get(COL_MONTH_2))
            except ValidationError as e:
                result.errors.append(f"Row {n}: {e}")
                continue

            existing = disciplines.get(key(name))
            if existing is not None:
                if course["id"] in (existing.get("course_ids") or []):
                    result.ignored.append(f'Row {n}: discipline "{name}" is already linked to "{course["name"]}"')
                    continue
                try:
                    fields = attach_course(existing, course["id"], course["name"], limit)
                except OverflowError:
                    result.errors.append(
                        f'Row {n}: discipline "{name}" is already linked to {limit} courses (maximum)'
                    )
                    continue
                fields["updated_at"] = now_iso()
                store.update(DISCIPLINES, existing["id"], fields)
                existing.update(fields)
                result.created.append(f'Discipline: {existing["name"]} linked to {course["name"]}')
                continue

            now = now_iso()
            doc = {
                "name": name,
                "course_ids": [course["id"]],
                "course_names": [course["name"]],
                **person_logins,
                "month_1": month_1,
                "month_2": month_2,
                "created_at": now,
                "updated_at": now,
            }
            doc["id"] = store.add(DISCIPLINES, doc)
            disciplines[key(name)] = doc
            result.created.append(f'Discipline: {name} ({course["name"]})')
        except Exception:
            log.error("Discipline import failed on row %s", n, exc_info=True)
            result.errors.append(f"Row {n}: failed to process")

    log.info("Discipline import finished: %s", result.summary())
    return result


def record_upload(store: DocumentStore, file_name: str, uploaded_by: str, records_count: int) -> str:
    """One upload_history entry per processed spreadsheet."""
    return store.add(UPLOAD_HISTORY, {
        "file_name": file_name,
        "uploaded_by": uploaded_by,
        "uploaded_at": now_iso(),
        "records_count": records_count,
        "month": datetime.now(timezone.utc).strftime("%Y-%m"),
    })


def upload_history(store: DocumentStore) -> List[Dict[str, Any]]:
    entries = store.list(UPLOAD_HISTORY)
    entries.sort(key=lambda e: e.get("uploaded_at") or "", reverse=True)
    return entries
