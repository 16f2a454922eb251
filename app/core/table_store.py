"""
Key-value table access over SQLAlchemy.

Each collection (vehicles, clients, rentals) is an ORM model keyed by
(partition_key, row_key). Every write commits on its own: there is no
transaction spanning several entities or several tables.
"""
import logging
from enum import Enum
from typing import Any, AsyncIterator, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import EntityNotFoundError, StoreFailure

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

KEY_FIELDS = ("partition_key", "row_key")
# Maintained by the store, never written by callers
SYSTEM_FIELDS = ("timestamp",)


class UpdateMode(str, Enum):
    merge = "Merge"
    replace = "Replace"


def _error_message(exc: SQLAlchemyError) -> str:
    return str(getattr(exc, "orig", None) or exc)


class TableClient(Generic[ModelT]):
    def __init__(self, db: AsyncSession, model: Type[ModelT]):
        self.db = db
        self.model = model
        self.table_name = model.__tablename__

    def _property_columns(self) -> List[str]:
        return [
            c.key
            for c in inspect(self.model).column_attrs
            if c.key not in KEY_FIELDS and c.key not in SYSTEM_FIELDS
        ]

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Write to table %s failed: %s", self.table_name, e)
            raise StoreFailure(_error_message(e)) from e

    async def create_entity(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        await self._commit()
        return entity

    async def get_entity(self, partition_key: Optional[str], row_key: Optional[str]) -> ModelT:
        if partition_key is None or row_key is None:
            raise EntityNotFoundError(self.table_name, partition_key, row_key)
        try:
            entity = await self.db.get(self.model, (partition_key, row_key))
        except SQLAlchemyError as e:
            raise StoreFailure(_error_message(e)) from e
        if entity is None:
            raise EntityNotFoundError(self.table_name, partition_key, row_key)
        return entity

    async def update_entity(self, entity: Dict[str, Any], mode: UpdateMode = UpdateMode.merge) -> ModelT:
        """
        Update an existing entity.

        `entity` carries the keys plus the properties to write. In merge mode
        only the given properties change; in replace mode every property not
        given is cleared.
        """
        properties = dict(entity)
        try:
            partition_key = properties.pop("partition_key")
            row_key = properties.pop("row_key")
        except KeyError as e:
            raise StoreFailure(f"Missing key field {e.args[0]} for table {self.table_name}") from e

        columns = self._property_columns()
        unknown = [field for field in properties if field not in columns]
        if unknown:
            raise StoreFailure(f"Unknown properties for table {self.table_name}: {', '.join(unknown)}")

        existing = await self.get_entity(partition_key, row_key)
        if mode == UpdateMode.replace:
            for column in columns:
                setattr(existing, column, properties.get(column))
        else:
            for field, value in properties.items():
                setattr(existing, field, value)
        await self._commit()
        return existing

    async def delete_entity(self, partition_key: str, row_key: str) -> None:
        existing = await self.get_entity(partition_key, row_key)
        try:
            await self.db.delete(existing)
        except SQLAlchemyError as e:
            raise StoreFailure(_error_message(e)) from e
        await self._commit()

    async def list_entities(self, **filters: Any) -> AsyncIterator[ModelT]:
        """Yield entities, optionally restricted by column equality filters applied in the query."""
        query = select(self.model)
        columns = list(KEY_FIELDS) + self._property_columns()
        for field, value in filters.items():
            if field not in columns:
                raise StoreFailure(f"Unknown filter property for table {self.table_name}: {field}")
            query = query.where(getattr(self.model, field) == value)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreFailure(_error_message(e)) from e
        for entity in result.scalars():
            yield entity
