from __future__ import annotations

from sqlalchemy import Column, Float, ForeignKey, Index, Integer, Text

from db.base import Base


class PerformanceResult(Base):
    __tablename__ = "performanceResult"

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(Integer, ForeignKey("runs.id"), nullable=True)
    its = Column(Text, nullable=True)
    avg_its = Column(Float, nullable=True)

    __table_args__ = (
        Index("idx_performanceResult_run_id", "run_id"),
    )
