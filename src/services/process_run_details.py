from __future__ import annotations

from typing import Any, Dict

from db.run_more_details_repo import RunMoreDetailsRepo
from db.runs_repo import RawRun
from services.rederive import RederivationService


class ProcessRunDetailsService(RederivationService):
    """Rebuild ``RunMoreDetails``; ModelMapId is back-filled later."""

    table_name = "RunMoreDetails"
    repo_class = RunMoreDetailsRepo

    def build_row(self, run: RawRun) -> Dict[str, Any]:
        return {
            "run_id": run.id,
            "timestamp": run.timestamp,
            "model_name": run.model_name,
            "user": run.user,
            "notes": run.notes,
            "model_map_id": None,
        }
