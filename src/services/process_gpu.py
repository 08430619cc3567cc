from __future__ import annotations

from typing import Any, Dict

from db.gpu_repo import GpuRepo
from db.runs_repo import RawRun
from parsers.gpu_info_parser import GpuInfoParser
from services.rederive import RederivationService, SkipRow


class ProcessGpuService(RederivationService):
    """Rebuild ``GPU``; brand and isLaptop start NULL and are set by the update passes."""

    table_name = "GPU"
    repo_class = GpuRepo

    def build_row(self, run: RawRun) -> Dict[str, Any]:
        if run.device_info is None:
            raise SkipRow("Missing device_info data")
        gpu = GpuInfoParser.parse(run.device_info)
        return {
            "run_id": run.id,
            "device": gpu.device,
            "driver": gpu.driver,
            "gpu_chip": gpu.gpu_chip,
            "brand": None,
            "is_laptop": None,
        }
