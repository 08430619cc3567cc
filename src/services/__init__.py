"""Re-derivation, enrichment and ingestion services over the runs tables."""

from services.process_app_details import ProcessAppDetailsService
from services.process_gpu import ProcessGpuService
from services.process_libraries import ProcessLibrariesService
from services.process_performance import ProcessPerformanceService
from services.process_run_details import ProcessRunDetailsService
from services.process_system_info import ProcessSystemInfoService

# Destination table name -> service rebuilding it.
REDERIVATION_SERVICES = {
    service.table_name: service
    for service in (
        ProcessPerformanceService,
        ProcessAppDetailsService,
        ProcessSystemInfoService,
        ProcessLibrariesService,
        ProcessGpuService,
        ProcessRunDetailsService,
    )
}

__all__ = [
    "REDERIVATION_SERVICES",
    "ProcessAppDetailsService",
    "ProcessGpuService",
    "ProcessLibrariesService",
    "ProcessPerformanceService",
    "ProcessRunDetailsService",
    "ProcessSystemInfoService",
]
