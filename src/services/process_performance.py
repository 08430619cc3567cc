from __future__ import annotations

from typing import Any, Dict

from db.performance_results_repo import PerformanceResultsRepo
from db.runs_repo import RawRun
from parsers.performance_parser import PerformanceParser
from services.rederive import RederivationService


class ProcessPerformanceService(RederivationService):
    """Rebuild ``performanceResult``; every run yields a row, even without samples."""

    table_name = "performanceResult"
    repo_class = PerformanceResultsRepo

    def build_row(self, run: RawRun) -> Dict[str, Any]:
        data = PerformanceParser.parse(run.vram_usage)
        return {"run_id": run.id, "its": run.vram_usage, "avg_its": data.avg_its}
