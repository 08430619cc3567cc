from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from db.app_details_repo import AppDetailsRepo
from db.db_conn import DbConn

logger = logging.getLogger(__name__)


@dataclass
class AppDetailsAnalysis:
    total_rows: int
    null_app_name_null_url: int
    null_app_name_non_null_url: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FixAppNamesCounts:
    automatic1111: int
    vladmandic: int
    stable_diffusion: int
    null_app_name_null_url: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AppDetailsQualityService:
    """Report on and repair missing app names in ``AppDetails``."""

    def __init__(self, db: DbConn, repo: Optional[AppDetailsRepo] = None) -> None:
        self.db = db
        self.repo = repo or AppDetailsRepo()

    def analyze(self) -> AppDetailsAnalysis:
        with self.db.session_scope() as session:
            counts = self.repo.quality_counts(session)
        logger.info(
            "App details analysis complete: %(total_rows)d total rows, "
            "%(null_app_name_null_url)d null app_name null url, "
            "%(null_app_name_non_null_url)d null app_name non-null url",
            counts,
        )
        return AppDetailsAnalysis(**counts)

    def fix_app_names(
        self,
        automatic1111: str,
        vladmandic: str,
        stable_diffusion: str,
        null_app_name_null_url: str,
    ) -> FixAppNamesCounts:
        """Apply the four URL rules in one transaction.

        AUTOMATIC1111 urls are always renamed; vladmandic urls only when the
        name is NULL or empty; stable-diffusion-webui urls only when NULL;
        rows with neither name nor url get ``null_app_name_null_url``.
        """
        if not (automatic1111 and vladmandic and stable_diffusion and null_app_name_null_url):
            raise ValueError("All fields must be non-empty")

        with self.db.session_scope() as session:
            counts = FixAppNamesCounts(
                automatic1111=self.repo.set_name_for_url_pattern(session, "AUTOMATIC1111", automatic1111),
                vladmandic=self.repo.fill_name_for_url_pattern(
                    session, "vladmandic", vladmandic, treat_empty_as_missing=True
                ),
                stable_diffusion=self.repo.fill_name_for_url_pattern(
                    session, "stable-diffusion-webui", stable_diffusion
                ),
                null_app_name_null_url=self.repo.fill_name_without_url(session, null_app_name_null_url),
            )
        logger.info("App names fix complete: %s", counts)
        return counts
