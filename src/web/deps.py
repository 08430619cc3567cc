"""Shared FastAPI dependencies (DB connection, per-table locks)."""
from __future__ import annotations

import threading
from typing import Dict, Optional

from fastapi import HTTPException

from config import load_env_file
from db.db_conn import DbConn

# Load environment variables so DbConn can read DB settings.
load_env_file()

_db_conn: Optional[DbConn] = None
_table_locks: Dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()


def get_db_conn() -> DbConn:
    """Provide the process-wide DbConn (lazy init)."""
    global _db_conn

    if _db_conn is None:
        try:
            _db_conn = DbConn()
        except ValueError as exc:
            raise HTTPException(status_code=503, detail=str(exc))
    return _db_conn


def table_lock(table_name: str) -> threading.Lock:
    """
    Lock serializing rebuilds of one destination table.

    A clear from one rebuild must never interleave with the insert of another;
    rebuilds of different tables may run side by side.
    """
    with _registry_lock:
        lock = _table_locks.get(table_name)
        if lock is None:
            lock = _table_locks[table_name] = threading.Lock()
        return lock
