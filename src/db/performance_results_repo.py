from __future__ import annotations

from db.derived_table_repo import DerivedTableRepo
from db.poco.performance_result import PerformanceResult


class PerformanceResultsRepo(DerivedTableRepo[PerformanceResult]):
    """Per-run it/s series and average."""

    model = PerformanceResult
