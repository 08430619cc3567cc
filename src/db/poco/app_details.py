from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, Text

from db.base import Base


class AppDetails(Base):
    __tablename__ = "AppDetails"

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(Integer, ForeignKey("runs.id"), nullable=True)
    app_name = Column(Text, nullable=True)
    updated = Column(Text, nullable=True)
    hash = Column(Text, nullable=True)
    url = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_AppDetails_run_id", "run_id"),
    )
