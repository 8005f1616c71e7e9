import io

import pandas as pd
import pytest

from core.constants import ROLE_TUTOR
from core.errors import ValidationError
from core.spreadsheets import read_sheet, require_columns, write_workbook
from screens.reports import exports


def test_empty_collections_have_nothing_to_export(store):
    for build in (exports.courses_frame, exports.disciplines_frame, exports.professors_frame,
                  exports.coordinators_frame, exports.people_frame, exports.full_report):
        with pytest.raises(ValidationError, match="No data to export"):
            build(store)


def test_courses_frame(store, make_person, make_course):
    joao = make_person("joao.silva", first_name="João", last_name="Silva")
    make_course("Mestrado CC", coordinator=joao)

    df = exports.courses_frame(store)

    assert list(df.columns) == ["Nome", "Coordenador", "Tutor", "Data de Criação"]
    assert df.iloc[0]["Coordenador"] == "João Silva"
    assert df.iloc[0]["Data de Criação"].count("/") == 2


def test_disciplines_and_professors_frames(store, make_course, make_discipline):
    a = make_course("Mestrado CC")
    b = make_course("MBA Mkt")
    make_discipline("IA", [a, b], professor_login="carlos.souza", month_1=3, month_2=4)

    df = exports.disciplines_frame(store)
    assert df.iloc[0].to_dict() == {
        "Nome": "IA", "Cursos": "Mestrado CC, MBA Mkt", "Professor": "carlos.souza",
        "Tutor": "", "Coordenador": "", "Mês 1": "03", "Mês 2": "04",
    }
    assert list(exports.professors_frame(store).columns) == ["Disciplina", "Cursos", "Professor", "Mês 1"]


def test_coordinators_frame_lists_courses_then_disciplines(store, make_person, make_course, make_discipline):
    joao = make_person("joao.silva", first_name="João", last_name="Silva")
    course = make_course("Mestrado CC", coordinator=joao)
    make_discipline("IA", [course], coordinator_login="joao.silva")

    df = exports.coordinators_frame(store)

    assert df["Tipo"].tolist() == ["Curso", "Disciplina"]
    assert df["Login do Coordenador"].tolist() == ["joao.silva", "joao.silva"]
    assert df["Nome do Coordenador"].tolist() == ["João Silva", "João Silva"]


def test_people_frame_uses_template_headers(store, make_person):
    make_person("ana.costa", role=ROLE_TUTOR, course_name="MBA Mkt")

    df = exports.people_frame(store)

    assert list(df.columns) == ["Tipo", "First Name", "Last Name", "Email", "Login", "Curso"]
    assert df.iloc[0]["Curso"] == "MBA Mkt"


def test_full_report_sheets_and_period_summary(store, make_course, make_discipline):
    course = make_course("Mestrado CC")
    make_discipline("IA", [course], month_1=5)
    make_discipline("Redes", [course])
    make_discipline("Banco de Dados", [course], month_1=2)
    make_discipline("Compiladores", [course], month_1=5)

    sheets = exports.full_report(store)

    assert [name for name, _ in sheets] == ["Cursos", "Disciplinas", "Por Período"]
    period = sheets[2][1]
    assert period["Período/Mês"].tolist() == ["02", "05", "Sem período"]
    assert period["Quantidade de Disciplinas"].tolist() == [1, 2, 1]
    assert period.iloc[1]["Disciplinas"] == "IA, Compiladores"


def test_disciplines_by_period_matches_either_month(store, make_discipline):
    make_discipline("IA", month_1=2, month_2=3)
    make_discipline("Redes", month_1=6)
    make_discipline("Sem mês")

    df = exports.disciplines_by_period(store, 3, 6)

    assert df["Nome"].tolist() == ["IA", "Redes"]
    with pytest.raises(ValidationError):
        exports.disciplines_by_period(store, 7, 12)
    with pytest.raises(ValidationError):
        exports.disciplines_by_period(store, 6, 3)


def test_workbook_round_trip_through_read_sheet():
    df = pd.DataFrame([{"Curso": "Mestrado CC", "Mês 1": "3"}])

    data = write_workbook([("Disciplinas", df), ("Vazia", pd.DataFrame())])

    assert data[:2] == b"PK"
    assert read_sheet(io.BytesIO(data), "x.xlsx") == [{"Curso": "Mestrado CC", "Mês 1": "3"}]


def test_read_csv_and_required_columns():
    raw = io.BytesIO("Curso,Disciplina\nMestrado CC, IA \n,\n".encode("utf-8"))

    rows = read_sheet(raw, "upload.csv")

    assert rows[0] == {"Curso": "Mestrado CC", "Disciplina": "IA"}
    require_columns(rows, ["Curso", "Disciplina"])
    with pytest.raises(ValidationError):
        require_columns(rows, ["Curso", "Mês 1"])
    with pytest.raises(ValidationError):
        require_columns([], ["Curso"])


def test_xls_uploads_are_rejected_with_a_clear_message():
    legacy = io.BytesIO(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 504)
    with pytest.raises(ValidationError, match="Unsupported file type"):
        read_sheet(legacy, "cursos.xls")
