from __future__ import annotations

# roster/services/student_svc.py
import logging
from datetime import date
from typing import Any, Optional

from ..db import get_conn
from ..logs import LogContext
from ..model import Student
from ..repository import StudentsTable

logger = logging.getLogger(__name__)


def _table_exists(conn, name: str) -> bool:
    row = conn.execute("SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (name,)).fetchone()
    return row is not None


def ensure_students_schema() -> bool:
    """Create the students table if missing. Returns True when it was created now."""
    with get_conn() as conn:
        if _table_exists(conn, StudentsTable.TABLE_NAME):
            return False
        created = StudentsTable(conn).create_table()
    if created:
        logger.info("students table created")
    return created


def reset_students_schema():
    with get_conn() as conn:
        table = StudentsTable(conn)
        table.drop_table()
        if not table.create_table():
            raise RuntimeError("students_table_create_failed")
    logger.info("students table reset")


def get_student(student_id: int) -> dict[str, Any]:
    with get_conn() as conn:
        s = StudentsTable(conn).find_by_primary_key(student_id)
    if s is None:
        raise LookupError("student_not_found")
    return s.to_dict()


def list_students(birthday: Optional[date] = None) -> list[dict[str, Any]]:
    with get_conn() as conn:
        table = StudentsTable(conn)
        rows = table.find_all() if birthday is None else table.find_by_birthday(birthday)
    if rows is None:
        raise RuntimeError("students_table_unavailable")
    return [s.to_dict() for s in rows]


def create_student(student: Student, log: LogContext) -> dict[str, Any]:
    log.set_student(student.id)
    with get_conn() as conn:
        table = StudentsTable(conn)
        if not table.save(student):
            raise ValueError("student_exists_or_invalid")
        after = table.find_by_primary_key(student.id)
    out = after.to_dict() if after else student.to_dict()
    log.set_after(out)
    return out


def update_student(student: Student, log: LogContext) -> dict[str, Any]:
    log.set_student(student.id)
    with get_conn() as conn:
        table = StudentsTable(conn)
        before = table.find_by_primary_key(student.id)
        if before is not None:
            log.set_before(before.to_dict())
        if not table.update(student):
            raise LookupError("student_not_found")
        after = table.find_by_primary_key(student.id)
    out = after.to_dict() if after else student.to_dict()
    log.set_after(out)
    return out


def delete_student(student_id: int, log: LogContext):
    log.set_student(student_id)
    with get_conn() as conn:
        table = StudentsTable(conn)
        before = table.find_by_primary_key(student_id)
        if before is not None:
            log.set_before(before.to_dict())
        if not table.delete(student_id):
            raise LookupError("student_not_found")
