import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "roster_test.db"
    # Point roster.db.get_db_path() at this temp DB
    os.environ["ROSTER_DB_PATH"] = str(path)
    from roster.logs import ensure_log_schema
    ensure_log_schema()
    return str(path)


@pytest.fixture()
def conn():
    """A caller-owned in-memory connection for repository tests."""
    c = sqlite3.connect(":memory:", isolation_level=None)
    c.row_factory = sqlite3.Row
    try:
        yield c
    finally:
        c.close()


@pytest.fixture()
def client(tmp_db_path):
    from roster.services.student_svc import ensure_students_schema
    ensure_students_schema()
    from roster.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("ROSTER_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    c = sqlite3.connect(tmp_db_path)
    try:
        c.execute("DROP TABLE IF EXISTS students")
        c.execute("DELETE FROM student_history")
        c.commit()
    finally:
        c.close()
    yield
