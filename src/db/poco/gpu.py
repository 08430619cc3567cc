from __future__ import annotations

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, Text

from db.base import Base


class Gpu(Base):
    __tablename__ = "GPU"

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(Integer, ForeignKey("runs.id"), nullable=True)
    device = Column(Text, nullable=True)
    driver = Column(Text, nullable=True)
    gpu_chip = Column(Text, nullable=True)
    brand = Column(Text, nullable=True)  # filled by the brand update pass
    is_laptop = Column("isLaptop", Boolean, nullable=True)  # filled by the laptop update pass

    __table_args__ = (
        Index("idx_GPU_run_id", "run_id"),
        Index("idx_GPU_device", "device"),
    )
