from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from garage_crm.core.exceptions import DataAccessError
from garage_crm.models.crm_models import ClientModel, ClaimModel

Row = Dict[str, Any]

class DataStore(ABC):
    """Table-level access used by detection and merging. Rows are plain dicts."""

    @abstractmethod
    async def select_all(self, table: str) -> List[Row]:
        pass

    @abstractmethod
    async def select_by_id(self, table: str, row_id: str) -> Optional[Row]:
        pass

    @abstractmethod
    async def select_by_ids(self, table: str, ids: Sequence[str]) -> List[Row]:
        pass

    @abstractmethod
    async def update(self, table: str, row_id: str, patch: Row):
        pass

    @abstractmethod
    async def update_where_in(self, table: str, column: str, values: Sequence[str], patch: Row):
        pass

    @abstractmethod
    async def delete(self, table: str, ids: Sequence[str]):
        pass

    @asynccontextmanager
    async def transaction(self):
        """Group writes; stores without transactions just run them in order."""
        yield

class SqlAlchemyStore(DataStore):
    TABLES = {
        'clients': ClientModel,
        'claims': ClaimModel,
    }

    def __init__(self, session):
        self.session = session
        self._tx_depth = 0

    def _model(self, table: str):
        try:
            return self.TABLES[table]
        except KeyError:
            raise DataAccessError(f"Unknown table: {table}") from None

    async def _commit(self):
        # Writes inside transaction() are committed when the block exits
        if self._tx_depth == 0:
            await self.session.commit()

    async def select_all(self, table: str) -> List[Row]:
        model = self._model(table)
        try:
            result = await self.session.execute(select(model).order_by(model.created_at.desc()))
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to read {table}: {e}") from e
        return [row.to_dict() for row in result.scalars().all()]

    async def select_by_id(self, table: str, row_id: str) -> Optional[Row]:
        model = self._model(table)
        try:
            result = await self.session.execute(select(model).where(model.id == row_id))
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to read {table} {row_id}: {e}") from e
        row = result.scalar_one_or_none()
        return row.to_dict() if row is not None else None

    async def select_by_ids(self, table: str, ids: Sequence[str]) -> List[Row]:
        if not ids:
            return []
        model = self._model(table)
        try:
            result = await self.session.execute(select(model).where(model.id.in_(list(ids))))
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to read {table}: {e}") from e
        return [row.to_dict() for row in result.scalars().all()]

    async def update(self, table: str, row_id: str, patch: Row):
        model = self._model(table)
        try:
            await self.session.execute(update(model).where(model.id == row_id).values(**patch))
            await self._commit()
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to update {table} {row_id}: {e}") from e

    async def update_where_in(self, table: str, column: str, values: Sequence[str], patch: Row):
        if not values:
            return
        model = self._model(table)
        if column not in model.__table__.columns:
            raise DataAccessError(f"Unknown column: {table}.{column}")
        try:
            stmt = update(model).where(getattr(model, column).in_(list(values))).values(**patch)
            await self.session.execute(stmt)
            await self._commit()
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to update {table}: {e}") from e

    async def delete(self, table: str, ids: Sequence[str]):
        if not ids:
            return
        model = self._model(table)
        try:
            await self.session.execute(delete(model).where(model.id.in_(list(ids))))
            await self._commit()
        except SQLAlchemyError as e:
            raise DataAccessError(f"Failed to delete from {table}: {e}") from e

    @asynccontextmanager
    async def transaction(self):
        self._tx_depth += 1
        try:
            if self.session.in_transaction():
                # Reads earlier in this session already began a transaction
                async with self.session.begin_nested():
                    yield
                if self._tx_depth == 1:
                    await self.session.commit()
            else:
                async with self.session.begin():
                    yield
        except SQLAlchemyError as e:
            raise DataAccessError(f"Transaction failed: {e}") from e
        finally:
            self._tx_depth -= 1
