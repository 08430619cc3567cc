from __future__ import annotations

from typing import Any, Dict

from db.runs_repo import RawRun
from db.system_info_repo import SystemInfoRepo
from parsers.system_info_parser import SystemInfoParser
from services.rederive import RederivationService, SkipRow


class ProcessSystemInfoService(RederivationService):
    """Rebuild ``SystemInfo``; only runs with all five fields are kept."""

    table_name = "SystemInfo"
    repo_class = SystemInfoRepo

    def build_row(self, run: RawRun) -> Dict[str, Any]:
        info = SystemInfoParser.parse(run.system_info)
        if not info.is_complete():
            raise SkipRow("Missing required system info fields", error=False)
        return {
            "run_id": run.id,
            "arch": info.arch,
            "cpu": info.cpu,
            "system": info.system,
            "release": info.release,
            "python": info.python,
        }
