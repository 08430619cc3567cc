"""Shared fixtures: an in-memory SQLite database with every table created."""
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db.db_conn import DbConn  # noqa: E402
from db.runs_repo import RunsRepo  # noqa: E402


@pytest.fixture
def db():
    conn = DbConn("sqlite://")
    conn.create_all()
    yield conn
    conn.engine.dispose()


@pytest.fixture
def add_runs(db):
    """Insert raw run dicts and return their ids."""

    def _add(*rows):
        with db.session_scope() as session:
            return [run.id for run in RunsRepo().insert_many(session, rows)]

    return _add
