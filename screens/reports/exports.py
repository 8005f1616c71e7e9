# -------------------------------------------------------------------
# screens/reports/exports.py
# Report frames; the page turns them into .xlsx downloads.
# -------------------------------------------------------------------
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from core.constants import COURSES, DISCIPLINES, PEOPLE
from core.document_store import DocumentStore
from core.errors import ValidationError
from core.importing import full_name, index_by, key
from screens.disciplines.db import format_month

NO_DATA = "No data to export"
NO_PERIOD = "Sem período"

COURSE_COLUMNS = ["Nome", "Coordenador", "Tutor", "Data de Criação"]
DISCIPLINE_COLUMNS = ["Nome", "Cursos", "Professor", "Tutor", "Coordenador", "Mês 1", "Mês 2"]
PROFESSOR_COLUMNS = ["Disciplina", "Cursos", "Professor", "Mês 1"]
COORDINATOR_COLUMNS = ["Tipo", "Nome", "Nome do Coordenador", "Login do Coordenador"]
PEOPLE_COLUMNS = ["Tipo", "First Name", "Last Name", "Email", "Login", "Curso"]
FULL_COURSE_COLUMNS = [
    "Nome do Curso", "Nome do Coordenador", "Login do Coordenador",
    "Nome do Tutor", "Login do Tutor", "Data de Criação",
]
FULL_DISCIPLINE_COLUMNS = [
    "Nome da Disciplina", "Cursos", "Nome do Coordenador", "Login do Coordenador",
    "Nome do Professor", "Login do Professor", "Nome do Tutor", "Login do Tutor",
    "Mês 1", "Mês 2",
]
PERIOD_COLUMNS = ["Período/Mês", "Quantidade de Disciplinas", "Disciplinas"]


def _require(rows: List[Any]) -> None:
    if not rows:
        raise ValidationError(NO_DATA)


def format_date(value: Optional[str]) -> str:
    """ISO timestamp as dd/mm/yyyy; anything unparseable is returned as is."""
    if not value:
        return ""
    try:
        return datetime.fromisoformat(str(value)).strftime("%d/%m/%Y")
    except ValueError:
        return str(value)


def _courses(d: Dict[str, Any]) -> str:
    return ", ".join(n for n in d.get("course_names") or [] if n)


class _People:
    """Login/id lookups used to show names next to stored logins."""

    def __init__(self, store: DocumentStore):
        people = store.list(PEOPLE)
        self.by_id = {p["id"]: p for p in people}
        self.by_login = index_by(people, "login")

    def login_of(self, person_id: Optional[str]) -> str:
        p = self.by_id.get(person_id or "")
        return (p.get("login") or "") if p else ""

    def name_of_login(self, login: Optional[str]) -> str:
        p = self.by_login.get(key(login))
        return full_name(p) if p else ""


def courses_frame(store: DocumentStore) -> pd.DataFrame:
    courses = store.list(COURSES)
    _require(courses)
    return pd.DataFrame([{
        "Nome": c.get("name") or "",
        "Coordenador": c.get("coordinator_name") or "",
        "Tutor": c.get("tutor_name") or "",
        "Data de Criação": format_date(c.get("created_at")),
    } for c in courses], columns=COURSE_COLUMNS)


def _discipline_row(d: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "Nome": d.get("name") or "",
        "Cursos": _courses(d),
        "Professor": d.get("professor_login") or "",
        "Tutor": d.get("tutor_login") or "",
        "Coordenador": d.get("coordinator_login") or "",
        "Mês 1": format_month(d.get("month_1")),
        "Mês 2": format_month(d.get("month_2")),
    }


def disciplines_frame(store: DocumentStore) -> pd.DataFrame:
    disciplines = store.list(DISCIPLINES)
    _require(disciplines)
    return pd.DataFrame([_discipline_row(d) for d in disciplines], columns=DISCIPLINE_COLUMNS)


def professors_frame(store: DocumentStore) -> pd.DataFrame:
    disciplines = store.list(DISCIPLINES)
    _require(disciplines)
    return pd.DataFrame([{
        "Disciplina": d.get("name") or "",
        "Cursos": _courses(d),
        "Professor": d.get("professor_login") or "",
        "Mês 1": format_month(d.get("month_1")),
    } for d in disciplines], columns=PROFESSOR_COLUMNS)


def coordinators_frame(store: DocumentStore) -> pd.DataFrame:
    """Coordinators per course, then per discipline."""
    people = _People(store)
    rows = [{
        "Tipo": "Curso",
        "Nome": c.get("name") or "",
        "Nome do Coordenador": c.get("coordinator_name") or "",
        "Login do Coordenador": people.login_of(c.get("coordinator_id")),
    } for c in store.list(COURSES)]
    rows += [{
        "Tipo": "Disciplina",
        "Nome": d.get("name") or "",
        "Nome do Coordenador": people.name_of_login(d.get("coordinator_login")),
        "Login do Coordenador": d.get("coordinator_login") or "",
    } for d in store.list(DISCIPLINES)]
    _require(rows)
    return pd.DataFrame(rows, columns=COORDINATOR_COLUMNS)


def people_frame(store: DocumentStore) -> pd.DataFrame:
    people = store.list(PEOPLE)
    _require(people)
    return pd.DataFrame([{
        "Tipo": p.get("role") or "",
        "First Name": p.get("first_name") or "",
        "Last Name": p.get("last_name") or "",
        "Email": p.get("email") or "",
        "Login": p.get("login") or "",
        "Curso": p.get("course_name") or "",
    } for p in people], columns=PEOPLE_COLUMNS)


def period_summary(disciplines: List[Dict[str, Any]]) -> pd.DataFrame:
    """Disciplines grouped by first month, in month order, blanks last."""
    groups: Dict[Any, List[str]] = {}
    for d in disciplines:
        groups.setdefault(d.get("month_1") or None, []).append(d.get("name") or "")
    ordered = sorted(groups.items(), key=lambda kv: (kv[0] is None, kv[0] or 0))
    return pd.DataFrame([{
        "Período/Mês": format_month(month) if month else NO_PERIOD,
        "Quantidade de Disciplinas": len(names),
        "Disciplinas": ", ".join(names),
    } for month, names in ordered], columns=PERIOD_COLUMNS)


def full_report(store: DocumentStore) -> List[Tuple[str, pd.DataFrame]]:
    """Sheets ``Cursos``, ``Disciplinas`` and ``Por Período``."""
    courses = store.list(COURSES)
    disciplines = store.list(DISCIPLINES)
    if not courses and not disciplines:
        raise ValidationError(NO_DATA)
    people = _People(store)

    courses_df = pd.DataFrame([{
        "Nome do Curso": c.get("name") or "",
        "Nome do Coordenador": c.get("coordinator_name") or "",
        "Login do Coordenador": people.login_of(c.get("coordinator_id")),
        "Nome do Tutor": c.get("tutor_name") or "",
        "Login do Tutor": people.login_of(c.get("tutor_id")),
        "Data de Criação": format_date(c.get("created_at")),
    } for c in courses], columns=FULL_COURSE_COLUMNS)

    disciplines_df = pd.DataFrame([{
        "Nome da Disciplina": d.get("name") or "",
        "Cursos": _courses(d),
        "Nome do Coordenador": people.name_of_login(d.get("coordinator_login")),
        "Login do Coordenador": d.get("coordinator_login") or "",
        "Nome do Professor": people.name_of_login(d.get("professor_login")),
        "Login do Professor": d.get("professor_login") or "",
        "Nome do Tutor": people.name_of_login(d.get("tutor_login")),
        "Login do Tutor": d.get("tutor_login") or "",
        "Mês 1": format_month(d.get("month_1")),
        "Mês 2": format_month(d.get("month_2")),
    } for d in disciplines], columns=FULL_DISCIPLINE_COLUMNS)

    return [
        ("Cursos", courses_df),
        ("Disciplinas", disciplines_df),
        ("Por Período", period_summary(disciplines)),
    ]


def _in_range(month: Optional[int], start: int, end: int) -> bool:
    return bool(month) and start <= month <= end


def disciplines_by_period(store: DocumentStore, start_month: int, end_month: int) -> pd.DataFrame:
    """Disciplines whose first or second month falls in ``[start_month, end_month]``."""
    if not (1 <= start_month <= 12 and 1 <= end_month <= 12):
        raise ValidationError("Months must be between 1 and 12")
    if start_month > end_month:
        raise ValidationError("The start month must not be after the end month")
    matches = [
        d for d in store.list(DISCIPLINES)
        if _in_range(d.get("month_1"), start_month, end_month)
        or _in_range(d.get("month_2"), start_month, end_month)
    ]
    if not matches:
        raise ValidationError("No disciplines found in the selected period")
    matches.sort(key=lambda d: (d.get("month_1") or 13, (d.get("name") or "").lower()))
    return pd.DataFrame([_discipline_row(d) for d in matches], columns=DISCIPLINE_COLUMNS)
