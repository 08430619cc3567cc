from __future__ import annotations

from typing import Dict

from sqlalchemy import case, func, or_, select, update
from sqlalchemy.orm import Session

from db.derived_table_repo import DerivedTableRepo
from db.poco.app_details import AppDetails


class AppDetailsRepo(DerivedTableRepo[AppDetails]):
    model = AppDetails

    def quality_counts(self, session: Session) -> Dict[str, int]:
        null_null = case((AppDetails.app_name.is_(None) & AppDetails.url.is_(None), 1), else_=0)
        null_url = case((AppDetails.app_name.is_(None) & AppDetails.url.is_not(None), 1), else_=0)
        stmt = select(
            func.count(AppDetails.id),
            func.coalesce(func.sum(null_null), 0),
            func.coalesce(func.sum(null_url), 0),
        )
        total, null_app_name_null_url, null_app_name_non_null_url = session.execute(stmt).one()
        return {
            "total_rows": int(total or 0),
            "null_app_name_null_url": int(null_app_name_null_url or 0),
            "null_app_name_non_null_url": int(null_app_name_non_null_url or 0),
        }

    def set_name_for_url_pattern(self, session: Session, pattern: str, app_name: str) -> int:
        """Overwrite app_name for every url containing ``pattern``."""
        stmt = (
            update(AppDetails)
            .where(AppDetails.url.like(f"%{pattern}%"))
            .values(app_name=app_name)
            .execution_options(synchronize_session=False)
        )
        return session.execute(stmt).rowcount or 0

    def fill_name_for_url_pattern(
        self, session: Session, pattern: str, app_name: str, treat_empty_as_missing: bool = False
    ) -> int:
        """Set app_name for urls containing ``pattern`` only where app_name is missing."""
        missing = AppDetails.app_name.is_(None)
        if treat_empty_as_missing:
            missing = or_(missing, AppDetails.app_name == "")
        stmt = (
            update(AppDetails)
            .where(AppDetails.url.like(f"%{pattern}%"), missing)
            .values(app_name=app_name)
            .execution_options(synchronize_session=False)
        )
        return session.execute(stmt).rowcount or 0

    def fill_name_without_url(self, session: Session, app_name: str) -> int:
        stmt = (
            update(AppDetails)
            .where(AppDetails.app_name.is_(None), AppDetails.url.is_(None))
            .values(app_name=app_name)
            .execution_options(synchronize_session=False)
        )
        return session.execute(stmt).rowcount or 0
