"""
Generic record store over a SQLAlchemy session.
Gives every entity kind the same create/read/update/list surface.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from app.core.database import Base, utcnow
from app.core.exceptions import NotFoundError

ModelT = TypeVar("ModelT", bound=Base)  # type: ignore[valid-type]


class RecordStore(Generic[ModelT]):
    """CRUD helper bound to one model class and one session."""

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    def create(self, commit: bool = True, **fields: Any) -> ModelT:
        record = self.model(**fields)
        self.db.add(record)
        if commit:
            self.db.commit()
            self.db.refresh(record)
        else:
            self.db.flush()
        return record

    def get(self, record_id: Any) -> Optional[ModelT]:
        return self.db.get(self.model, record_id)

    def get_or_raise(self, record_id: Any) -> ModelT:
        record = self.get(record_id)
        if record is None:
            raise NotFoundError(f"{self.model.__name__} {record_id} not found")
        return record

    def update(self, record: ModelT, **fields: Any) -> ModelT:
        """Applies the given fields and bumps updated_at. Last write wins."""
        for name, value in fields.items():
            setattr(record, name, value)
        if hasattr(record, "updated_at"):
            setattr(record, "updated_at", utcnow())
        self.db.commit()
        self.db.refresh(record)
        return record

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = "created_at",
        descending: bool = True,
    ) -> List[ModelT]:
        """
        Lists records matching every field equality in `filters`.
        Fields whose filter value is None are ignored.
        """
        query = self.db.query(self.model)
        for name, value in (filters or {}).items():
            if value is None:
                continue
            query = query.filter(getattr(self.model, name) == value)

        if sort and hasattr(self.model, sort):
            column = getattr(self.model, sort)
            query = query.order_by(column.desc() if descending else column.asc())

        return query.all()

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        query = self.db.query(self.model)
        for name, value in (filters or {}).items():
            if value is not None:
                query = query.filter(getattr(self.model, name) == value)
        return query.count()
