from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Body
from pydantic import BaseModel, Field

from ..logs import LogContext, student_history
from ..model import Student
from ..services.student_svc import (
    get_student, list_students, create_student, update_student, delete_student,
)

router = APIRouter()


class StudentBody(BaseModel):
    id: int
    first_name: str = Field(..., max_length=40)
    last_name: str = Field(..., max_length=40)
    birthday: Optional[date] = None  # YYYY-MM-DD

    def to_student(self) -> Student:
        return Student(self.id, self.first_name, self.last_name, self.birthday)


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, LookupError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ValueError):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


def _run_logged(log: LogContext, fn, *args):
    try:
        out = fn(*args, log)
    except Exception as e:
        log.write("ERROR", str(e))
        raise _http_error(e)
    log.write("OK")
    return out


@router.get("/api/students/list")
def api_students_list(birthday: Optional[date] = Query(None, description="YYYY-MM-DD, exact match")):
    try:
        items = list_students(birthday)
    except Exception as e:
        raise _http_error(e)
    return {"total": len(items), "items": items}


@router.get("/api/students/{student_id}")
def api_students_get(student_id: int):
    try:
        return get_student(student_id)
    except Exception as e:
        raise _http_error(e)


@router.get("/api/students/{student_id}/history")
def api_students_history(student_id: int, page: int = Query(1, ge=1), size: int = Query(20, ge=1, le=200),
                         failed_only: bool = False):
    total, items = student_history(student_id, page, size, failed_only)
    return {"total": total, "items": items}


@router.post("/api/students/create", status_code=201)
def api_students_create(body: StudentBody):
    item = _run_logged(LogContext("STUDENT_CREATE"), create_student, body.to_student())
    return {"message": "ok", "item": item}


@router.post("/api/students/update")
def api_students_update(body: StudentBody):
    item = _run_logged(LogContext("STUDENT_UPDATE"), update_student, body.to_student())
    return {"message": "ok", "item": item}


@router.post("/api/students/delete")
def api_students_delete(student_id: int = Body(..., embed=True)):
    _run_logged(LogContext("STUDENT_DELETE"), delete_student, student_id)
    return {"message": "ok"}
