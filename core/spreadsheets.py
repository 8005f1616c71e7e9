# core/spreadsheets.py
from __future__ import annotations
import io
from typing import Any, Dict, List, Sequence, Tuple

import pandas as pd

from core.errors import ValidationError

EXCEL_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_TYPES = ("xlsx", "csv")


def read_sheet(file: Any, file_name: str | None = None) -> List[Dict[str, str]]:
    """
    Rows of the first sheet of an .xlsx or .csv file as dicts keyed by the
    header row. Every cell is read as text; blanks become "".
    """
    name = (file_name or getattr(file, "name", "") or "").lower()
    if not name.endswith(tuple(f".{t}" for t in SHEET_TYPES)):
        raise ValidationError("Unsupported file type. Upload an .xlsx or .csv spreadsheet.")
    if hasattr(file, "seek"):
        file.seek(0)
    if name.endswith(".csv"):
        df = pd.read_csv(file, dtype=str, keep_default_na=False)
    else:
        df = pd.read_excel(file, sheet_name=0, dtype=str, keep_default_na=False, engine="openpyxl")
    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("")
    return [{k: str(v).strip() for k, v in r.items()} for r in df.to_dict(orient="records")]


def missing_columns(rows: List[Dict[str, str]], required: Sequence[str]) -> List[str]:
    if not rows:
        return []
    present = set(rows[0].keys())
    return [c for c in required if c not in present]


def require_columns(rows: List[Dict[str, str]], required: Sequence[str]) -> None:
    if not rows:
        raise ValidationError("The spreadsheet is empty.")
    missing = missing_columns(rows, required)
    if missing:
        raise ValidationError(f"Spreadsheet is missing required columns: {', '.join(missing)}")


def write_workbook(sheets: Sequence[Tuple[str, pd.DataFrame]]) -> bytes:
    """One .xlsx file with a sheet per (name, frame); empty frames are skipped."""
    buf = io.BytesIO()
    written = 0
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for sheet_name, df in sheets:
            if df is None or df.empty:
                continue
            df.to_excel(writer, sheet_name=sheet_name[:31], index=False)
            written += 1
        if written == 0:
            pd.DataFrame().to_excel(writer, sheet_name="Sheet1", index=False)
    return buf.getvalue()


def frame_to_xlsx(df: pd.DataFrame, sheet_name: str) -> bytes:
    return write_workbook([(sheet_name, df)])

