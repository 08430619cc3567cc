from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from db.base import Base


class ModelMap(Base):
    __tablename__ = "ModelMap"

    id = Column(Integer, primary_key=True, autoincrement=True)
    model_name = Column(Text, nullable=True)
    base_model = Column(Text, nullable=True)
