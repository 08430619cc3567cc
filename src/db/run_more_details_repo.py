from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.derived_table_repo import DerivedTableRepo
from db.poco.run_more_details import RunMoreDetails


class RunMoreDetailsRepo(DerivedTableRepo[RunMoreDetails]):
    model = RunMoreDetails

    def list_without_model_map(self, session: Session) -> List[Tuple[int, Optional[str]]]:
        """Return ``(id, model_name)`` for rows whose ModelMapId is still NULL."""
        stmt = (
            select(RunMoreDetails.id, RunMoreDetails.model_name)
            .where(RunMoreDetails.model_map_id.is_(None))
            .order_by(RunMoreDetails.id.asc())
        )
        return [(row.id, row.model_name) for row in session.execute(stmt)]
