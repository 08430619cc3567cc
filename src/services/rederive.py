"""Shared flow of the services that rebuild a derived table from ``runs``.

Every service runs the same four steps:

1. fetch a materialized snapshot of all runs (ordered by id);
2. transform each run into zero or one destination row. This phase is
   pure and never fails; a run that cannot be used raises ``SkipRow``
   and is recorded in the report;
3. in one transaction, delete every destination row and bulk insert the
   new ones. Any storage error rolls the whole transaction back, so the
   destination keeps what it had before the call;
4. return a ``ProcessingReport``.

Two calls for the same destination table must not interleave; callers
serialize them (see ``web.deps.table_lock``).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from db.db_conn import DbConn
from db.derived_table_repo import DerivedTableRepo
from db.runs_repo import RawRun, RunsRepo
from services.report import ProcessingReport

logger = logging.getLogger(__name__)


class SkipRow(Exception):
    """Raised by ``build_row`` when a run yields no destination row.

    ``error=False`` marks an expected skip (counted in ``skipped_rows``)
    rather than a bad source row (counted in ``error_rows``).
    """

    def __init__(self, reason: str, error: bool = True) -> None:
        super().__init__(reason)
        self.reason = reason
        self.error = error


@dataclass
class TransformResult:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class RederivationService:
    """Base class; subclasses set ``table_name``/``repo_class`` and implement ``build_row``."""

    table_name: str = ""
    repo_class = DerivedTableRepo

    def __init__(
        self,
        db: DbConn,
        runs_repo: Optional[RunsRepo] = None,
        target_repo: Optional[DerivedTableRepo] = None,
    ) -> None:
        self.db = db
        self.runs_repo = runs_repo or RunsRepo()
        self.target_repo = target_repo or self.repo_class()

    def build_row(self, run: RawRun) -> Dict[str, Any]:
        raise NotImplementedError

    def transform(self, runs: Sequence[RawRun]) -> TransformResult:
        result = TransformResult()
        for index, run in enumerate(runs):
            try:
                if run.id is None:
                    raise SkipRow("Invalid run data: missing id")
                result.rows.append(self.build_row(run))
            except SkipRow as skip:
                if skip.error:
                    result.errors.append(f"Run {index + 1}: {skip.reason}")
                    logger.warning("%s: skipping run %s: %s", self.table_name, index + 1, skip.reason)
                else:
                    result.skipped.append(f"Run {index + 1}: {skip.reason}")
                    logger.info("%s: skipping run %s: %s", self.table_name, index + 1, skip.reason)
        return result

    def run(self) -> ProcessingReport:
        logger.info("Rebuilding %s from runs", self.table_name)
        try:
            with self.db.session_scope() as session:
                runs = self.runs_repo.fetch_all_raw_runs(session)
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch runs data: %s", exc)
            return ProcessingReport(
                success=False,
                message=f"Failed to fetch runs data for {self.table_name}",
                error_messages=[f"Failed to fetch runs data: {exc}"],
            )

        logger.info("Found %d runs to process", len(runs))
        result = self.transform(runs)

        try:
            with self.db.session_scope() as session:
                inserted = len(self.target_repo.clear_and_bulk_insert(session, result.rows))
        except SQLAlchemyError as exc:
            logger.error("Transaction failed while rebuilding %s, rolled back: %s", self.table_name, exc)
            return ProcessingReport(
                success=False,
                message=f"{self.table_name} processing failed; no rows were written",
                total_rows=len(runs),
                inserted_rows=0,
                error_rows=len(result.errors),
                skipped_rows=len(result.skipped),
                error_messages=result.errors + [f"Transaction failed: {exc}"],
            )

        logger.info(
            "%s processing complete: %d inserted, %d errors, %d skipped out of %d runs",
            self.table_name,
            inserted,
            len(result.errors),
            len(result.skipped),
            len(runs),
        )
        return ProcessingReport(
            success=True,
            message=f"{self.table_name} processing completed successfully",
            total_rows=len(runs),
            inserted_rows=inserted,
            error_rows=len(result.errors),
            skipped_rows=len(result.skipped),
            error_messages=result.errors,
        )
