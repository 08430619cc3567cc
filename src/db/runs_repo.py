from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from db.poco import AppDetails, Gpu, Libraries, PerformanceResult, Run, RunMoreDetails, SystemInfo

RUN_FIELDS = (
    "timestamp",
    "vram_usage",
    "info",
    "system_info",
    "model_info",
    "device_info",
    "xformers",
    "model_name",
    "user",
    "notes",
)

# Child tables first so the runs delete never trips a foreign key.
DEPENDENT_MODELS = (PerformanceResult, AppDetails, SystemInfo, Libraries, Gpu, RunMoreDetails)


@dataclass(frozen=True)
class RawRun:
    """Detached snapshot of one ``runs`` row."""

    id: Optional[int]
    timestamp: Optional[str] = None
    vram_usage: Optional[str] = None
    info: Optional[str] = None
    system_info: Optional[str] = None
    model_info: Optional[str] = None
    device_info: Optional[str] = None
    xformers: Optional[str] = None
    model_name: Optional[str] = None
    user: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_row(cls, row: Run) -> "RawRun":
        return cls(id=row.id, **{name: getattr(row, name) for name in RUN_FIELDS})


class RunsRepo:
    """Read and bulk-replace the raw ``runs`` table."""

    def fetch_all_raw_runs(self, session: Session) -> List[RawRun]:
        stmt = select(Run).order_by(Run.id.asc())
        return [RawRun.from_row(r) for r in session.scalars(stmt).all()]

    def count(self, session: Session) -> int:
        return int(session.scalar(select(func.count()).select_from(Run)) or 0)

    def clear_all(self, session: Session) -> None:
        """Delete every run together with all rows derived from it."""
        for model in DEPENDENT_MODELS:
            session.execute(delete(model))
        session.execute(delete(Run))

    def insert_many(self, session: Session, rows: Iterable[Mapping[str, Optional[str]]]) -> List[Run]:
        objs = [Run(**{name: row.get(name) for name in RUN_FIELDS}) for row in rows]
        if not objs:
            return []
        session.add_all(objs)
        session.flush()
        return objs
