"""
Generic create/read/update/delete over a SQLAlchemy model.

Each resource router instantiates one repository instead of repeating the
select/404/setattr/commit sequence by hand.
"""
import logging
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.database import Base
from app.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class CRUDRepository(Generic[ModelType]):
    """Parameterized CRUD for one model type."""

    def __init__(self, model: Type[ModelType], label: Optional[str] = None):
        self.model = model
        self.label = label or model.__name__

    def query(self) -> Select:
        return select(self.model)

    async def get(self, db: AsyncSession, obj_id: int) -> Optional[ModelType]:
        result = await db.execute(self.query().where(self.model.id == obj_id))
        return result.scalar_one_or_none()

    async def get_or_404(self, db: AsyncSession, obj_id: int) -> ModelType:
        obj = await self.get(db, obj_id)
        if obj is None:
            raise NotFoundError(f"{self.label} not found")
        return obj

    async def get_by(self, db: AsyncSession, **filters: Any) -> Optional[ModelType]:
        stmt = self.query()
        for field, value in filters.items():
            stmt = stmt.where(getattr(self.model, field) == value)
        result = await db.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def list(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: int = 100,
        stmt: Optional[Select] = None,
        order_by: Sequence[Any] = (),
    ) -> Sequence[ModelType]:
        stmt = stmt if stmt is not None else self.query()
        stmt = stmt.order_by(*order_by) if order_by else stmt.order_by(self.model.id)
        result = await db.execute(stmt.offset(skip).limit(limit))
        return result.scalars().all()

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

    async def create(self, db: AsyncSession, data: dict) -> ModelType:
        obj = self.model(**data)
        db.add(obj)
        await self._commit(db, f"{self.label} violates a uniqueness constraint")
        await db.refresh(obj)
        return obj

    async def update(self, db: AsyncSession, obj: ModelType, data: dict) -> ModelType:
        # Update only provided fields
        for field, value in data.items():
            setattr(obj, field, value)
        await self._commit(db, f"{self.label} violates a uniqueness constraint")
        await db.refresh(obj)
        return obj

    async def delete(self, db: AsyncSession, obj: ModelType) -> None:
        await db.delete(obj)
        await self._commit(db, f"{self.label} is still referenced and cannot be deleted")

    async def _commit(self, db: AsyncSession, conflict_message: str) -> None:
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            logger.warning("%s: %s", conflict_message, exc.orig)
            raise ConflictError(conflict_message) from exc
