# backend/farmsync/crud/base.py
"""
Entity Data Gateway.

One gateway per entity wraps the async session factory and exposes
``get_all / get_by_id / create / update / delete``. Expected failures
(unknown id, invalid payload, database errors) are logged here and
reported as ``None`` / ``False``; callers never see an exception for them.
A stored row that no longer fits the output schema counts as a database
error.

Records leave the gateway as plain dicts in the canonical snake_case shape.
"""
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from farmsync.core.logger import get_logger

logger = get_logger("gateway")

Record = Dict[str, Any]


class EntityGateway:
    def __init__(
        self,
        name: str,
        model,
        create_schema: Type[BaseModel],
        update_schema: Type[BaseModel],
        out_schema: Type[BaseModel],
        session_factory: async_sessionmaker,
    ):
        self.name = name
        self.model = model
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.out_schema = out_schema
        self._session_factory = session_factory

    def __repr__(self) -> str:
        return f"<EntityGateway {self.name}>"

    def _to_record(self, row) -> Record:
        return self.out_schema.model_validate(row).model_dump()

    def _coerce(self, schema: Type[BaseModel], data: Any) -> Optional[BaseModel]:
        if isinstance(data, schema):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            logger.warning(
                "Rejected invalid %s payload: %s", self.name, exc.errors()[0].get("msg"),
                extra={"entity": self.name},
            )
            return None

    # ----------------------------
    # Reads
    # ----------------------------
    async def get_all(self) -> Optional[List[Record]]:
        try:
            async with self._session_factory() as db:
                rows = await db.scalars(select(self.model).order_by(self.model.created_at))
                return [self._to_record(r) for r in rows.all()]
        except (SQLAlchemyError, ValidationError):
            logger.exception("Failed to list %s", self.name, extra={"entity": self.name})
            return None

    async def get_by_id(self, record_id: str) -> Optional[Record]:
        if not record_id:
            return None
        try:
            async with self._session_factory() as db:
                row = await db.get(self.model, str(record_id))
                if row is None:
                    logger.info(
                        "%s not found", self.name,
                        extra={"entity": self.name, "record_id": record_id},
                    )
                    return None
                return self._to_record(row)
        except (SQLAlchemyError, ValidationError):
            logger.exception(
                "Failed to fetch %s", self.name,
                extra={"entity": self.name, "record_id": record_id},
            )
            return None

    # ----------------------------
    # Writes
    # ----------------------------
    async def create(self, data: Any) -> Optional[Record]:
        payload = self._coerce(self.create_schema, data)
        if payload is None:
            return None
        try:
            async with self._session_factory() as db:
                row = self.model(**payload.model_dump())
                db.add(row)
                await db.commit()
                await db.refresh(row)
                record = self._to_record(row)
        except (SQLAlchemyError, ValidationError):
            logger.exception("Failed to create %s", self.name, extra={"entity": self.name})
            return None

        logger.info(
            "Created %s", self.name,
            extra={"entity": self.name, "record_id": record["id"]},
        )
        return record

    async def update(self, record_id: str, data: Any) -> Optional[Record]:
        payload = self._coerce(self.update_schema, data)
        if payload is None:
            return None
        try:
            async with self._session_factory() as db:
                row = await db.get(self.model, str(record_id))
                if row is None:
                    logger.info(
                        "Cannot update missing %s", self.name,
                        extra={"entity": self.name, "record_id": record_id},
                    )
                    return None
                for field, value in payload.model_dump(exclude_unset=True).items():
                    setattr(row, field, value)
                await db.commit()
                await db.refresh(row)
                record = self._to_record(row)
        except (SQLAlchemyError, ValidationError):
            logger.exception(
                "Failed to update %s", self.name,
                extra={"entity": self.name, "record_id": record_id},
            )
            return None

        logger.info("Updated %s", self.name, extra={"entity": self.name, "record_id": record_id})
        return record

    async def delete(self, record_id: str) -> bool:
        try:
            async with self._session_factory() as db:
                row = await db.get(self.model, str(record_id))
                if row is None:
                    logger.info(
                        "Cannot delete missing %s", self.name,
                        extra={"entity": self.name, "record_id": record_id},
                    )
                    return False
                await db.delete(row)
                await db.commit()
        except SQLAlchemyError:
            logger.exception(
                "Failed to delete %s", self.name,
                extra={"entity": self.name, "record_id": record_id},
            )
            return False

        logger.info("Deleted %s", self.name, extra={"entity": self.name, "record_id": record_id})
        return True
