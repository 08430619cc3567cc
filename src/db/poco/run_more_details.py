from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, Text

from db.base import Base


class RunMoreDetails(Base):
    __tablename__ = "RunMoreDetails"

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(Integer, ForeignKey("runs.id"), nullable=True)
    timestamp = Column(Text, nullable=True)
    model_name = Column(Text, nullable=True)
    user = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    model_map_id = Column("ModelMapId", Integer, ForeignKey("ModelMap.id"), nullable=True)

    __table_args__ = (
        Index("idx_RunMoreDetails_run_id", "run_id"),
        Index("idx_RunMoreDetails_model_name", "model_name"),
    )
