# screens/courses/linking.py
# -------------------------------------------------------------------
# Course <-> Discipline links.
# The relation is stored on the discipline side only, as two parallel
# lists: course_ids[i] is the course whose display name is course_names[i].
# -------------------------------------------------------------------
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from core.constants import DISCIPLINES, MAX_COURSES_PER_DISCIPLINE
from core.document_store import DocumentStore, now_iso

log = logging.getLogger(__name__)


@dataclass
class SyncResult:
    detached: List[str] = field(default_factory=list)
    attached: List[str] = field(default_factory=list)
    renamed: List[str] = field(default_factory=list)
    skipped_at_capacity: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def writes(self) -> int:
        return len(self.detached) + len(self.attached) + len(self.renamed)

    @property
    def ok(self) -> bool:
        return not self.failures


def _lists(discipline: Dict) -> tuple[List[str], List[str]]:
    ids = list(discipline.get("course_ids") or [])
    names = list(discipline.get("course_names") or [])
    # pad/truncate so the two lists stay index-aligned
    if len(names) < len(ids):
        names += [""] * (len(ids) - len(names))
    return ids, names[:len(ids)]


def detach_course(discipline: Dict, course_id: str) -> Optional[Dict]:
    """New ``course_ids``/``course_names`` without ``course_id``, or None if it was not linked."""
    ids, names = _lists(discipline)
    if course_id not in ids:
        return None
    i = ids.index(course_id)
    del ids[i]
    del names[i]
    return {"course_ids": ids, "course_names": names}


def attach_course(discipline: Dict, course_id: str, course_name: str,
                  max_courses: int = MAX_COURSES_PER_DISCIPLINE) -> Optional[Dict]:
    """
    New lists with the course appended, or None if already linked.
    Raises OverflowError when the discipline is at capacity.
    """
    ids, names = _lists(discipline)
    if course_id in ids:
        return None
    if len(ids) >= max_courses:
        raise OverflowError(discipline.get("name") or discipline.get("id"))
    ids.append(course_id)
    names.append(course_name)
    return {"course_ids": ids, "course_names": names}


def rename_course(discipline: Dict, course_id: str, course_name: str) -> Optional[Dict]:
    """New lists with the course's display name replaced, or None if unchanged or not linked."""
    ids, names = _lists(discipline)
    if course_id not in ids:
        return None
    i = ids.index(course_id)
    if names[i] == course_name:
        return None
    names[i] = course_name
    return {"course_ids": ids, "course_names": names}


def linked_discipline_ids(store: DocumentStore, course_id: str) -> Set[str]:
    return {
        d["id"] for d in store.list(DISCIPLINES)
        if course_id in (d.get("course_ids") or [])
    }


def sync_course_disciplines(
    store: DocumentStore,
    course_id: str,
    course_name: str,
    desired_ids: Iterable[str],
    max_courses: int = MAX_COURSES_PER_DISCIPLINE,
) -> SyncResult:
    """
    Make exactly ``desired_ids`` reference the course.

    Disciplines no longer wanted lose the course (id and name at the same
    index); wanted disciplines gain it unless they already hold
    ``max_courses`` courses, in which case they keep their state and a
    warning names them. Wanted disciplines that are already linked only
    get the display name refreshed if the course was renamed. Disciplines
    already in the right state are not written, so a second run with the
    same set is a no-op.

    A write failure on one discipline is logged and recorded, the others
    still run, and nothing already written is rolled back.
    """
    result = SyncResult()
    desired = set(desired_ids)
    disciplines = store.list(DISCIPLINES)

    # 1) detach
    for d in disciplines:
        if d["id"] in desired:
            continue
        fields = detach_course(d, course_id)
        if fields is None:
            continue
        try:
            store.update(DISCIPLINES, d["id"], {**fields, "updated_at": now_iso()})
            d.update(fields)
            result.detached.append(d["id"])
        except Exception:
            log.error("Failed to detach course %s from discipline %s", course_id, d["id"], exc_info=True)
            result.failures.append(f'Could not update discipline "{d.get("name", d["id"])}"')

    # 2) attach (and refresh the display name where the course was renamed)
    for did in desired - {d["id"] for d in disciplines}:
        log.warning("Discipline %s selected for course %s no longer exists", did, course_id)

    for d in disciplines:
        did = d["id"]
        if did not in desired:
            continue
        try:
            fields = attach_course(d, course_id, course_name, max_courses)
        except OverflowError:
            result.skipped_at_capacity.append(did)
            result.warnings.append(
                f'Discipline "{d.get("name", did)}" is already linked to {max_courses} courses (maximum)'
            )
            continue
        bucket = result.attached
        if fields is None:
            fields = rename_course(d, course_id, course_name)
            bucket = result.renamed
            if fields is None:
                continue
        try:
            store.update(DISCIPLINES, did, {**fields, "updated_at": now_iso()})
            d.update(fields)
            bucket.append(did)
        except Exception:
            log.error("Failed to link course %s to discipline %s", course_id, did, exc_info=True)
            result.failures.append(f'Could not update discipline "{d.get("name", did)}"')

    log.info(
        "Course %s links synced: %d detached, %d attached, %d at capacity, %d failed",
        course_id, len(result.detached), len(result.attached),
        len(result.skipped_at_capacity), len(result.failures),
    )
    return result

