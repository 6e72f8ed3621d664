from __future__ import annotations

# roster/logs.py
import datetime as dt
import json
import logging
import time
import uuid
from typing import Any, Dict, List, Optional, Tuple

from .db import get_conn

logger = logging.getLogger(__name__)

# One row per attempted change to a student, successful or not.
# student_id is not a foreign key: history outlives deleted rows and dropped tables.
DDL = """
CREATE TABLE IF NOT EXISTS student_history (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  user TEXT NOT NULL,
  action TEXT NOT NULL,
  student_id INTEGER,
  request_id TEXT,
  before_json TEXT,
  after_json TEXT,
  result TEXT,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_history_student ON student_history(student_id, id);
"""

ACTIONS = ("STUDENT_CREATE", "STUDENT_UPDATE", "STUDENT_DELETE")


def ensure_log_schema():
    with get_conn() as conn:
        conn.executescript(DDL)


class LogContext:
    """Tracks one change to one student; write() stores it with the before/after snapshots."""

    def __init__(self, action: str, user: str = "owner"):
        if action not in ACTIONS:
            raise ValueError(f"unknown action: {action}")
        self.action = action
        self.user = user
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.student_id: Optional[int] = None
        self.before: Optional[dict] = None
        self.after: Optional[dict] = None

    def set_student(self, student_id: Optional[int]): self.student_id = student_id
    def set_before(self, snapshot: Optional[dict]): self.before = snapshot
    def set_after(self, snapshot: Optional[dict]): self.after = snapshot

    def write(self, result: str = "OK", err: Optional[str] = None):
        if result != "OK":
            logger.info(f"{self.action} student {self.student_id} failed: {err}")
        rec = {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "user": self.user,
            "action": self.action,
            "student_id": self.student_id,
            "request_id": self.request_id,
            "before_json": json.dumps(self.before, ensure_ascii=False) if self.before is not None else None,
            "after_json": json.dumps(self.after, ensure_ascii=False) if self.after is not None else None,
            "result": result,
            "err_msg": err,
            "latency_ms": int((time.perf_counter() - self.start) * 1000),
        }
        with get_conn() as conn:
            conn.execute(
                """INSERT INTO student_history
                (ts,user,action,student_id,request_id,before_json,after_json,result,err_msg,latency_ms)
                VALUES(:ts,:user,:action,:student_id,:request_id,:before_json,:after_json,:result,:err_msg,:latency_ms)""",
                rec
            )


def _decode(row) -> Dict[str, Any]:
    it = dict(row)
    for k in ("before", "after"):
        raw = it.pop(f"{k}_json")
        it[k] = json.loads(raw) if raw else None
    return it


def student_history(student_id: int, page: int = 1, size: int = 20,
                    failed_only: bool = False) -> Tuple[int, List[Dict[str, Any]]]:
    """Changes recorded for one student, newest first, as (total, items)."""
    where = "WHERE student_id = :sid"
    if failed_only:
        where += " AND result <> 'OK'"
    params = {"sid": student_id}
    with get_conn() as conn:
        total = conn.execute(f"SELECT COUNT(1) AS cnt FROM student_history {where}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT * FROM student_history {where} ORDER BY id DESC LIMIT :limit OFFSET :offset",
            {**params, "limit": size, "offset": (max(page, 1) - 1) * size},
        ).fetchall()
    return total, [_decode(r) for r in rows]
