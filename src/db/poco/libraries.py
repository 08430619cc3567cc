from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, Text

from db.base import Base


class Libraries(Base):
    __tablename__ = "Libraries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(Integer, ForeignKey("runs.id"), nullable=True)
    torch = Column(Text, nullable=True)
    xformers = Column(Text, nullable=True)  # parsed from runs.model_info
    xformers1 = Column(Text, nullable=True)  # copied verbatim from runs.xformers
    diffusers = Column(Text, nullable=True)
    transformers = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_Libraries_run_id", "run_id"),
    )
