"""Repository layer: DB access helpers (SQLite).

Repositories borrow a caller-owned connection and keep SQL strings out of services.
"""
from __future__ import annotations

from .table import Table
from .students_repo import StudentsTable

__all__ = ["Table", "StudentsTable"]
