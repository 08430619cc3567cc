from __future__ import annotations

from typing import Any, Dict

from db.app_details_repo import AppDetailsRepo
from db.runs_repo import RawRun
from parsers.app_details_parser import AppDetailsParser
from services.rederive import RederivationService, SkipRow


class ProcessAppDetailsService(RederivationService):
    table_name = "AppDetails"
    repo_class = AppDetailsRepo

    def build_row(self, run: RawRun) -> Dict[str, Any]:
        if run.info is None:
            raise SkipRow("Missing info data")
        details = AppDetailsParser.parse(run.info)
        return {
            "run_id": run.id,
            "app_name": details.app_name,
            "updated": details.updated,
            "hash": details.hash,
            "url": details.url,
        }
