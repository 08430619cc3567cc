from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from db.db_conn import DbConn
from db.model_map_repo import ModelMapRepo
from db.run_more_details_repo import RunMoreDetailsRepo

logger = logging.getLogger(__name__)


@dataclass
class UpdateRunModelMapReport:
    success: bool
    message: str
    updated: int = 0
    not_found: int = 0
    error_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class UpdateRunModelMapService:
    """Back-fill ``RunMoreDetails.ModelMapId`` by exact model_name match.

    Rows without a match stay NULL and are retried on the next call.
    """

    def __init__(
        self,
        db: DbConn,
        details_repo: Optional[RunMoreDetailsRepo] = None,
        model_map_repo: Optional[ModelMapRepo] = None,
    ) -> None:
        self.db = db
        self.details_repo = details_repo or RunMoreDetailsRepo()
        self.model_map_repo = model_map_repo or ModelMapRepo()

    def run(self) -> UpdateRunModelMapReport:
        logger.info("Updating RunMoreDetails with ModelMapId")
        try:
            with self.db.session_scope() as session:
                pending = self.details_repo.list_without_model_map(session)
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch RunMoreDetails without ModelMapId: %s", exc)
            return UpdateRunModelMapReport(
                success=False, message=f"Failed to fetch RunMoreDetails without ModelMapId: {exc}"
            )

        if not pending:
            logger.info("All RunMoreDetails entries already have ModelMapId")
            return UpdateRunModelMapReport(success=True, message="All RunMoreDetails entries already have ModelMapId.")

        logger.info("Found %d RunMoreDetails entries without ModelMapId", len(pending))
        updated = 0
        not_found = 0
        error_count = 0
        for row_id, model_name in pending:
            if model_name is None:
                logger.info("RunMoreDetails ID %s has NULL model_name, skipping", row_id)
                not_found += 1
                continue
            try:
                with self.db.session_scope() as session:
                    entry = self.model_map_repo.find_by_model_name(session, model_name)
                    if entry is None:
                        logger.info("No matching entry in ModelMap for model_name: %s", model_name)
                        not_found += 1
                        continue
                    self.details_repo.update(session, row_id, model_map_id=entry.id)
                    logger.info(
                        "Updated RunMoreDetails ID %s with ModelMapId %s for model_name '%s'",
                        row_id,
                        entry.id,
                        model_name,
                    )
            except SQLAlchemyError as exc:
                error_count += 1
                logger.warning("Failed to update RunMoreDetails ID %s: %s", row_id, exc)
                continue
            updated += 1

        logger.info("RunMoreDetails update complete: %d updated, %d not found", updated, not_found)
        return UpdateRunModelMapReport(
            success=True,
            message=(
                "RunMoreDetails updated with ModelMapId successfully. "
                f"Updated: {updated}, Not found: {not_found}"
            ),
            updated=updated,
            not_found=not_found,
            error_count=error_count,
        )
