import pytest

from core.constants import DISCIPLINES, UPLOAD_HISTORY
from core.errors import ValidationError
from screens.disciplines.db import parse_month
from screens.disciplines.importer import import_disciplines, record_upload, template_frame


def _row(course, name, month_1="", month_2="", coordinator="", professor="", tutor=""):
    return {
        "Curso": course, "Disciplina": name,
        "Login Coordenador": coordinator, "Login Professor": professor, "Login Tutor": tutor,
        "Mês 1": month_1, "Mês 2": month_2,
    }


@pytest.mark.parametrize("value,expected", [
    ("", None), (None, None), ("3", 3), ("03", 3), (3, 3), (3.0, 3),
    ("2025-03", 3), ("2025-12-01", 12), ("2025-03-01 00:00:00", 3),
])
def test_parse_month_accepts_codes_and_dates(value, expected):
    assert parse_month(value) == expected


@pytest.mark.parametrize("value", ["0", "13", "March", "2025/03"])
def test_parse_month_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_month(value)


def test_template_columns():
    assert list(template_frame().columns) == [
        "Curso", "Disciplina", "Login Coordenador", "Login Professor", "Login Tutor", "Mês 1", "Mês 2",
    ]


def test_same_discipline_in_two_courses_is_created_then_linked(store, make_course, make_person):
    make_person("joao")
    mestrado = make_course("Mestrado CC")
    mba = make_course("MBA Mkt")

    result = import_disciplines(store, [
        _row("Mestrado CC", "IA", "3", coordinator="joao"),
        _row("mba mkt", "ia", coordinator="joao"),
        _row("MBA Mkt", "IA", coordinator="joao"),
    ])

    assert result.created == [
        "Discipline: IA (Mestrado CC)",
        "Discipline: IA linked to MBA Mkt",
    ]
    assert result.ignored == ['Row 4: discipline "IA" is already linked to "MBA Mkt"']
    [ia] = store.list(DISCIPLINES)
    assert ia["course_ids"] == [mestrado["id"], mba["id"]]
    assert ia["course_names"] == ["Mestrado CC", "MBA Mkt"]
    assert ia["month_1"] == 3
    assert ia["coordinator_login"] == "joao"


def test_existing_discipline_already_linked_is_ignored(store, make_course, make_discipline):
    course = make_course("Mestrado CC")
    make_discipline("IA", [course])

    result = import_disciplines(store, [_row("Mestrado CC", "IA")])

    assert result.ignored == ['Row 2: discipline "IA" is already linked to "Mestrado CC"']
    assert store.count(DISCIPLINES) == 1


def test_row_errors(store, make_course, make_person):
    make_course("Mestrado CC")
    make_person("carlos.souza")

    result = import_disciplines(store, [
        _row("", "IA"),
        _row("Nowhere", "IA"),
        _row("Mestrado CC", "IA", professor="ghost"),
        _row("Mestrado CC", "IA", month_1="14"),
        _row("Mestrado CC", "IA", professor="carlos.souza", month_1="2025-04"),
    ])

    assert result.errors == [
        "Row 2: course and discipline are required",
        'Row 3: course "Nowhere" not found',
        'Row 4: login "ghost" not found',
        'Row 5: Invalid month "14" (use 1-12 or YYYY-MM)',
    ]
    assert result.created == ["Discipline: IA (Mestrado CC)"]
    [ia] = store.list(DISCIPLINES)
    assert ia["professor_login"] == "carlos.souza"
    assert ia["month_1"] == 4


def test_linking_a_full_discipline_is_an_error(store, make_course, make_discipline):
    make_course("Mestrado CC")
    make_discipline("IA", course_ids=[f"c{i}" for i in range(15)], course_names=["x"] * 15)

    result = import_disciplines(store, [_row("Mestrado CC", "IA")])

    assert result.errors == ['Row 2: discipline "IA" is already linked to 15 courses (maximum)']


def test_record_upload(store):
    record_upload(store, "disciplinas.xlsx", "admin", 4)

    [entry] = store.list(UPLOAD_HISTORY)
    assert entry["file_name"] == "disciplinas.xlsx"
    assert entry["uploaded_by"] == "admin"
    assert entry["records_count"] == 4
    assert len(entry["month"]) == 7
