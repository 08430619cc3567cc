from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.derived_table_repo import DerivedTableRepo
from db.poco.gpu import Gpu


class GpuRepo(DerivedTableRepo[Gpu]):
    model = Gpu

    def list_devices(self, session: Session) -> List[Tuple[int, Optional[str]]]:
        """Return ``(id, device)`` pairs ordered by id."""
        stmt = select(Gpu.id, Gpu.device).order_by(Gpu.id.asc())
        return [(row.id, row.device) for row in session.execute(stmt)]
