from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, Text

from db.base import Base


class SystemInfo(Base):
    __tablename__ = "SystemInfo"

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(Integer, ForeignKey("runs.id"), nullable=True)
    arch = Column(Text, nullable=True)
    cpu = Column(Text, nullable=True)
    system = Column(Text, nullable=True)
    release = Column(Text, nullable=True)
    python = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_SystemInfo_run_id", "run_id"),
    )
