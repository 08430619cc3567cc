from __future__ import annotations

from typing import Any, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

T = TypeVar("T")


class DerivedTableRepo(Generic[T]):
    """Shared operations for tables that are rebuilt from ``runs``.

    Methods never commit; the caller owns the transaction (see
    ``DbConn.session_scope``).
    """

    model: Type[T]

    def list_all(self, session: Session) -> List[T]:
        stmt = select(self.model).order_by(self.model.id.asc())
        return list(session.scalars(stmt).all())

    def count(self, session: Session) -> int:
        return int(session.scalar(select(func.count()).select_from(self.model)) or 0)

    def get_by_id(self, session: Session, row_id: int) -> Optional[T]:
        return session.get(self.model, row_id)

    def clear_all(self, session: Session) -> int:
        result = session.execute(delete(self.model))
        return result.rowcount or 0

    def bulk_insert(self, session: Session, rows: Iterable[Mapping[str, Any]]) -> List[T]:
        objs = [self.model(**row) for row in rows]
        if not objs:
            return []
        session.add_all(objs)
        session.flush()  # ensures PKs are populated
        return objs

    def clear_and_bulk_insert(self, session: Session, rows: Iterable[Mapping[str, Any]]) -> List[T]:
        """Replace the whole table with ``rows`` inside the caller's transaction."""
        self.clear_all(session)
        return self.bulk_insert(session, rows)

    def update(self, session: Session, row_id: int, **values: Any) -> Optional[T]:
        obj = session.get(self.model, row_id)
        if obj is None:
            return None
        for name, value in values.items():
            setattr(obj, name, value)
        session.add(obj)
        session.flush()
        return obj
