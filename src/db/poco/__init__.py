"""ORM models for the runs table and every table derived from it."""

from db.poco.app_details import AppDetails
from db.poco.gpu import Gpu
from db.poco.libraries import Libraries
from db.poco.model_map import ModelMap
from db.poco.performance_result import PerformanceResult
from db.poco.run import Run
from db.poco.run_more_details import RunMoreDetails
from db.poco.system_info import SystemInfo

__all__ = [
    "AppDetails",
    "Gpu",
    "Libraries",
    "ModelMap",
    "PerformanceResult",
    "Run",
    "RunMoreDetails",
    "SystemInfo",
]
