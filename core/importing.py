# core/importing.py
"""
Pieces shared by the course, discipline and people spreadsheet importers.

Each importer walks its rows strictly in order and files every row under
exactly one of ``created``, ``ignored`` or ``errors``. Lookups are built
once before the loop and updated in place after each write, so a later
row sees what an earlier row of the same batch created.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

HEADER_ROWS = 1


@dataclass
class ImportResult:
    created: List[str] = field(default_factory=list)
    ignored: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.ignored) + len(self.errors)

    def summary(self) -> str:
        return f"{len(self.created)} created, {len(self.ignored)} ignored, {len(self.errors)} errors"


def row_number(index: int) -> int:
    """Spreadsheet line of the ``index``-th (0-based) data row."""
    return index + 1 + HEADER_ROWS


def clean(value: Any) -> str:
    """Cell value as a stripped string; ``None``/NaN become ``""`` and ``3.0`` becomes ``"3"``."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def cell(row: Mapping[str, Any], column: str) -> str:
    return clean(row.get(column))


def key(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def full_name(person: Mapping[str, Any]) -> str:
    return f"{person.get('first_name') or ''} {person.get('last_name') or ''}".strip()


def index_by(docs: Iterable[Dict[str, Any]], attr: str) -> Dict[str, Dict[str, Any]]:
    """Lower-cased ``attr`` → document; the first document wins on collisions."""
    out: Dict[str, Dict[str, Any]] = {}
    for d in docs:
        k = key(d.get(attr))
        if k and k not in out:
            out[k] = d
    return out
