import math

from core.importing import ImportResult, clean, index_by, key, row_number


class TestCellCleaning:
    """Spreadsheet cells arrive as pandas values and are compared as text."""

    def test_blank_values_become_empty_strings(self):
        assert clean(None) == ""
        assert clean(math.nan) == ""
        assert clean("   ") == ""

    def test_whole_floats_lose_the_decimal_part(self):
        assert clean(3.0) == "3"
        assert clean(2.5) == "2.5"

    def test_text_is_stripped(self):
        assert clean("  Mestrado  ") == "Mestrado"

    def test_key_is_case_insensitive(self):
        assert key(" JOAO.Silva ") == "joao.silva"
        assert key(None) == ""


class TestRowNumbering:
    def test_first_data_row_is_line_two(self):
        assert row_number(0) == 2
        assert row_number(9) == 11


class TestIndexBy:
    def test_first_document_wins(self):
        docs = [{"id": "a", "login": "Ana"}, {"id": "b", "login": "ana"}, {"id": "c", "login": ""}]
        index = index_by(docs, "login")
        assert index["ana"]["id"] == "a"
        assert "" not in index


def test_import_result_summary():
    result = ImportResult(created=["x"], ignored=["y", "z"])
    assert result.total == 3
    assert result.summary() == "1 created, 2 ignored, 0 errors"
