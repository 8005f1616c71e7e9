# -------------------------------------------------------------------
# screens/people/importer.py
# People spreadsheet import.
# -------------------------------------------------------------------
from __future__ import annotations
import logging
from typing import Any, List, Mapping

import pandas as pd

from core.constants import COURSES, PEOPLE, PERSON_ROLES, ROLE_PROFESSOR, ROLE_TUTOR
from core.document_store import DocumentStore, now_iso
from core.importing import ImportResult, cell, index_by, key, row_number
from screens.people.constants import (
    COL_COURSE,
    COL_EMAIL,
    COL_FIRST_NAME,
    COL_LAST_NAME,
    COL_LOGIN,
    COL_ROLE,
    TEMPLATE_COLUMNS,
    TEMPLATE_ROWS,
)

log = logging.getLogger(__name__)


def template_frame() -> pd.DataFrame:
    return pd.DataFrame(TEMPLATE_ROWS, columns=TEMPLATE_COLUMNS)


def preview_rows(store: DocumentStore, rows: List[Mapping[str, Any]]) -> pd.DataFrame:
    logins = {key(p.get("login")) for p in store.list(PEOPLE)}
    out = []
    for row in rows:
        login = cell(row, COL_LOGIN)
        out.append({
            "Role": cell(row, COL_ROLE),
            "Name": f"{cell(row, COL_FIRST_NAME)} {cell(row, COL_LAST_NAME)}".strip(),
            "Email": cell(row, COL_EMAIL),
            "Login": login,
            "Course": cell(row, COL_COURSE),
            "Status": "exists" if key(login) in logins else "new",
        })
    return pd.DataFrame(out)


def import_people(store: DocumentStore, rows: List[Mapping[str, Any]]) -> ImportResult:
    """
    One person per row. Existing logins are skipped; everyone else gets
    the login as initial password, except Professors who never sign in.
    """
    result = ImportResult()
    people = store.list(PEOPLE)
    logins = {key(p.get("login")) for p in people}
    emails = {key(p.get("email")) for p in people}
    courses = index_by(store.list(COURSES), "name")

    for i, row in enumerate(rows):
        n = row_number(i)
        try:
            role = cell(row, COL_ROLE)
            first_name = cell(row, COL_FIRST_NAME)
            last_name = cell(row, COL_LAST_NAME)
            email = cell(row, COL_EMAIL)
            login = cell(row, COL_LOGIN)
            course_name = cell(row, COL_COURSE)

            if not (role and first_name and last_name and email and login):
                result.errors.append(f"Row {n}: missing required fields")
                continue
            if role not in PERSON_ROLES:
                result.errors.append(f'Row {n}: invalid role "{role}"')
                continue
            if key(login) in logins:
                result.ignored.append(f'Row {n}: login "{login}" already exists')
                continue
            if key(email) in emails:
                result.errors.append(f'Row {n}: email "{email}" is already in use')
                continue

            data = {
                "role": role,
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "login": login,
                "course_id": None,
                "course_name": None,
                "created_at": now_iso(),
            }
            if role != ROLE_PROFESSOR:
                data["password"] = login
            if role == ROLE_TUTOR and course_name:
                course = courses.get(key(course_name))
                if course is None:
                    result.errors.append(f'Row {n}: course "{course_name}" not found')
                    continue
                data["course_id"] = course["id"]
                data["course_name"] = course["name"]

            store.add(PEOPLE, data)
            logins.add(key(login))
            emails.add(key(email))
            result.created.append(f"{role}: {first_name} {last_name}")
        except Exception:
            log.error("People import failed on row %s", n, exc_info=True)
            result.errors.append(f"Row {n}: failed to process")

    log.info("People import finished: %s", result.summary())
    return result
