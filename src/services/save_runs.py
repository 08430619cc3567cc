"""Bulk-replace the ``runs`` table from an uploaded JSON array.

The upload is validated up front; nothing is written unless every record
passes. The write is one transaction: every derived table and the old
runs are deleted, then the new batch is inserted.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel, ValidationError, field_validator
from sqlalchemy.exc import SQLAlchemyError

from db.db_conn import DbConn
from db.runs_repo import RunsRepo
from services.report import ProcessingReport

logger = logging.getLogger(__name__)

SIZE_UNITS = ("GB", "MB", "KB", "B")


class RunDataValidationError(ValueError):
    """The uploaded payload is not a valid list of run records."""


class RunData(BaseModel):
    timestamp: str
    vram_usage: str
    info: Optional[str] = None
    system_info: Optional[str] = None
    model_info: Optional[str] = None
    device_info: Optional[str] = None
    xformers: Optional[str] = None
    model_name: Optional[str] = None
    user: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def _check_timestamp(cls, value: str) -> str:
        if not value:
            raise ValueError("Timestamp cannot be empty")
        if not any(ch.isdigit() for ch in value):
            raise ValueError("Invalid timestamp format")
        return value

    @field_validator("vram_usage")
    @classmethod
    def _check_vram_usage(cls, value: str) -> str:
        if not value:
            raise ValueError("VRAM usage cannot be empty")
        if not any(unit in value for unit in SIZE_UNITS) and not any(ch.isdigit() for ch in value):
            raise ValueError("Invalid VRAM usage format")
        return value


def parse_run_payload(payload: Union[bytes, str, Sequence[Any]]) -> List[RunData]:
    """Decode and validate an upload; raises RunDataValidationError."""
    if isinstance(payload, (bytes, str)):
        if not payload:
            raise RunDataValidationError("Uploaded file is empty")
        try:
            payload = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RunDataValidationError(f"Uploaded file is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise RunDataValidationError("Expected a JSON array of run records")

    records: List[RunData] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise RunDataValidationError(f"Record at index {index} is not an object")
        try:
            records.append(RunData.model_validate(item))
        except ValidationError as exc:
            details = "; ".join(err["msg"] for err in exc.errors())
            raise RunDataValidationError(f"Invalid record at index {index}: {details}") from exc
    return records


class SaveRunsService:
    def __init__(self, db: DbConn, runs_repo: Optional[RunsRepo] = None) -> None:
        self.db = db
        self.runs_repo = runs_repo or RunsRepo()

    def save_runs(self, payload: Union[bytes, str, Sequence[Any]]) -> ProcessingReport:
        """Validate ``payload`` and replace all runs with it.

        Raises RunDataValidationError for a bad payload; storage failures are
        reported with ``success=False`` and leave the previous runs in place.
        """
        records = parse_run_payload(payload)
        logger.info("Parsed %d rows from upload", len(records))

        try:
            with self.db.session_scope() as session:
                self.runs_repo.clear_all(session)
                inserted = len(self.runs_repo.insert_many(session, (r.model_dump() for r in records)))
        except SQLAlchemyError as exc:
            logger.error("Failed to save runs, rolled back: %s", exc)
            return ProcessingReport(
                success=False,
                message="Saving runs failed; previous data kept",
                total_rows=len(records),
                error_rows=len(records),
                error_messages=[f"Transaction failed: {exc}"],
            )

        logger.info("Save data processing completed. Total: %d, Inserted: %d", len(records), inserted)
        return ProcessingReport(
            success=True,
            message="Data processed successfully",
            total_rows=len(records),
            inserted_rows=inserted,
        )
