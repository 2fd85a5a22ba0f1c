"""PostgreSQL/pgvector catalog store.

Each call opens its own session and commits a single statement, so concurrent
seeding tasks never share a session. Row-level concurrency is left to the
database.
"""

import logging

import numpy as np
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from actionfinder.core.exceptions import StoreError
from actionfinder.db import catalog_repository
from actionfinder.models.catalog import ActionRow, AppRow
from actionfinder.models.domain import NearestAction

logger = logging.getLogger(__name__)


class SqlCatalogStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def insert_app(self, name: str, description: str) -> int:
        try:
            async with self._session_factory() as session:
                row = await catalog_repository.save_app(
                    session, AppRow(name=name, description=description)
                )
                app_id = row.id
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Insert of app '%s' failed", name, exc_info=True)
            raise StoreError(f"Failed to insert app '{name}'") from e
        return app_id

    async def insert_action(
        self,
        app_id: int,
        name: str,
        description: str,
        embedding: np.ndarray,
        embedding_model: str,
    ) -> int:
        try:
            async with self._session_factory() as session:
                row = await catalog_repository.save_action(
                    session,
                    ActionRow(
                        app_id=app_id,
                        name=name,
                        description=description,
                        embedding=embedding,
                        embedding_model=embedding_model,
                    ),
                )
                action_id = row.id
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Insert of action '%s' (app %d) failed", name, app_id, exc_info=True)
            raise StoreError(f"Failed to insert action '{name}'") from e
        return action_id

    async def find_nearest_action(
        self, embedding: np.ndarray, embedding_model: str
    ) -> NearestAction | None:
        try:
            async with self._session_factory() as session:
                return await catalog_repository.find_nearest_action(session, embedding, embedding_model)
        except SQLAlchemyError as e:
            logger.error("Nearest action query failed", exc_info=True)
            raise StoreError("Nearest action query failed") from e

    async def count_apps(self) -> int:
        try:
            async with self._session_factory() as session:
                return await catalog_repository.count_apps(session)
        except SQLAlchemyError as e:
            raise StoreError("Counting apps failed") from e

    async def count_actions(self) -> int:
        try:
            async with self._session_factory() as session:
                return await catalog_repository.count_actions(session)
        except SQLAlchemyError as e:
            raise StoreError("Counting actions failed") from e
