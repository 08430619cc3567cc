from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.poco.model_map import ModelMap


class ModelMapRepo:
    """Lookup table mapping checkpoint names to their base model."""

    def create(self, session: Session, model_name: str, base_model: Optional[str] = None) -> ModelMap:
        obj = ModelMap(model_name=model_name, base_model=base_model)
        session.add(obj)
        session.flush()
        return obj

    def list_all(self, session: Session) -> List[ModelMap]:
        return list(session.scalars(select(ModelMap).order_by(ModelMap.id.asc())).all())

    def find_by_model_name(self, session: Session, model_name: str) -> Optional[ModelMap]:
        """Exact match on model_name; the lowest id wins when names repeat."""
        stmt = select(ModelMap).where(ModelMap.model_name == model_name).order_by(ModelMap.id.asc()).limit(1)
        return session.scalars(stmt).first()
