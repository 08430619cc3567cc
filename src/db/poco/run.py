from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from db.base import Base


class Run(Base):
    """One ingested benchmark event; every field is raw text as uploaded."""

    __tablename__ = "runs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(Text, nullable=True)
    vram_usage = Column(Text, nullable=True)  # holds the it/s series, not memory usage
    info = Column(Text, nullable=True)
    system_info = Column(Text, nullable=True)
    model_info = Column(Text, nullable=True)
    device_info = Column(Text, nullable=True)
    xformers = Column(Text, nullable=True)
    model_name = Column(Text, nullable=True)
    user = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
