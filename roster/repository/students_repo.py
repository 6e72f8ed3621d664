"""
students table access.

Every public method runs exactly one parameterized statement on the borrowed
connection. Statement failures (sqlite3.Error) are logged and reported as
False / None; a failure while reading the result cursor raises ValueError.
The connection is never committed, rolled back or closed here.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from datetime import date
from typing import List, Optional

from ..model import Student
from ..utils import date_to_sql_date, sql_date_to_date
from .table import Table

logger = logging.getLogger(__name__)


class StudentsTable(Table[Student, int]):
    TABLE_NAME = "students"

    def __init__(self, conn: sqlite3.Connection):
        if conn is None:
            raise TypeError("conn must not be None")
        self.conn = conn

    @property
    def table_name(self) -> str:
        return self.TABLE_NAME

    def create_table(self) -> bool:
        sql = (
            f"CREATE TABLE {self.TABLE_NAME} ("
            "id INTEGER PRIMARY KEY,"
            "firstName CHAR(40),"
            "lastName CHAR(40),"
            "birthday DATE"
            ")"
        )
        return self._execute_update(sql, ()) is not None

    def drop_table(self) -> bool:
        return self._execute_update(f"DROP TABLE {self.TABLE_NAME}", ()) is not None

    def find_by_primary_key(self, id: int) -> Optional[Student]:
        rows = self._query(f"SELECT * FROM {self.TABLE_NAME} WHERE id = ?", (id,))
        return rows[0] if rows else None

    def find_all(self) -> Optional[List[Student]]:
        return self._query(f"SELECT * FROM {self.TABLE_NAME}", ())

    def find_by_birthday(self, birthday: Optional[date]) -> Optional[List[Student]]:
        # None binds NULL, and NULL = NULL is never true: empty result
        return self._query(
            f"SELECT * FROM {self.TABLE_NAME} WHERE birthday = ?",
            (date_to_sql_date(birthday),),
        )

    def save(self, student: Student) -> bool:
        # id INTEGER PRIMARY KEY aliases rowid: a NULL id would be auto assigned
        if student.id is None:
            logger.warning(f"{self.TABLE_NAME}: refusing INSERT without id")
            return False
        sql = f"INSERT INTO {self.TABLE_NAME} VALUES (?, ?, ?, ?)"
        params = (
            student.id,
            student.first_name,
            student.last_name,
            date_to_sql_date(student.birthday),
        )
        return self._execute_update(sql, params) is not None

    def update(self, student: Student) -> bool:
        sql = f"UPDATE {self.TABLE_NAME} SET firstName = ?, lastName = ?, birthday = ? WHERE id = ?"
        params = (
            student.first_name,
            student.last_name,
            date_to_sql_date(student.birthday),
            student.id,
        )
        changed = self._execute_update(sql, params)
        return bool(changed)

    def delete(self, id: int) -> bool:
        changed = self._execute_update(f"DELETE FROM {self.TABLE_NAME} WHERE id = ?", (id,))
        return bool(changed)

    # ---- internals ----

    def _execute_update(self, sql: str, params: tuple) -> Optional[int]:
        """Run a write/DDL statement. Returns the affected row count, None on failure."""
        try:
            with closing(self.conn.cursor()) as cur:
                cur.execute(sql, params)
                return max(cur.rowcount, 0)
        except sqlite3.Error as e:
            logger.warning(f"{self.TABLE_NAME}: statement failed ({sql.split(' ', 1)[0]}): {e}")
            return None

    def _query(self, sql: str, params: tuple) -> Optional[List[Student]]:
        try:
            with closing(self.conn.cursor()) as cur:
                cur.execute(sql, params)
                return self._read_students(cur)
        except sqlite3.Error as e:
            logger.warning(f"{self.TABLE_NAME}: query failed: {e}")
            return None

    @staticmethod
    def _read_students(cur) -> List[Student]:
        """
        Decode every row of an executed cursor into Student records, in cursor order.

        Raises ValueError if iterating the cursor or decoding a row fails; callers
        let it propagate rather than returning a partial list.
        """
        out: List[Student] = []
        try:
            columns = [d[0] for d in cur.description or ()]
            for row in cur:
                r = dict(zip(columns, row))
                out.append(Student(
                    id=int(r["id"]),
                    first_name=r["firstName"],
                    last_name=r["lastName"],
                    birthday=sql_date_to_date(r["birthday"]),
                ))
        except (sqlite3.Error, KeyError, TypeError, ValueError) as e:
            raise ValueError("Error from given result set.") from e
        return out
