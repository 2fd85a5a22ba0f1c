"""Concurrent seeding pipeline.

All apps are inserted in parallel; once an app's row exists, all of its
actions are embedded and inserted in parallel. The first failure propagates
to the caller (fail-fast). Sibling tasks are not cancelled and rows that
already committed stay committed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from actionfinder.core.interfaces import CatalogStore, DelayStrategy, EmbeddingProvider
from actionfinder.models.domain import SeedReport
from actionfinder.pipeline.prompt_builder import build_embedding_text
from actionfinder.schemas.catalog import Action, App

logger = logging.getLogger(__name__)


class SeedingPipeline:
    def __init__(
        self,
        store: CatalogStore,
        embedder: EmbeddingProvider,
        delay: DelayStrategy,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self._delay = delay

    async def seed(self, catalog: Sequence[App]) -> SeedReport:
        # gather() re-raises the first error without cancelling the other tasks
        action_counts = await asyncio.gather(*(self._seed_app(app) for app in catalog))
        report = SeedReport(apps=len(catalog), actions=sum(action_counts))
        logger.info("Seeded %d apps and %d actions", report.apps, report.actions)
        return report

    async def _seed_app(self, app: App) -> int:
        app_id = await self._insert_app(app)
        await asyncio.gather(*(self._insert_action(app_id, app, action) for action in app.actions))
        return len(app.actions)

    async def _insert_app(self, app: App) -> int:
        delay = self._delay.next_delay()
        logger.info("Inserting app: %s with delay: %dms", app.name, delay * 1000)
        await asyncio.sleep(delay)

        app_id = await self._store.insert_app(app.name, app.description)

        logger.info("Inserted app: %s (id=%d) with delay: %dms", app.name, app_id, delay * 1000)
        return app_id

    async def _insert_action(self, app_id: int, app: App, action: Action) -> None:
        delay = self._delay.next_delay()
        logger.info(
            "Inserting action: %s, related to app: %s with delay: %dms",
            action.name, app.name, delay * 1000,
        )
        await asyncio.sleep(delay)

        embedding = await self._embedder.embed(build_embedding_text(app, action))
        await self._store.insert_action(
            app_id,
            action.name,
            action.description,
            embedding,
            self._embedder.model,
        )

        logger.info(
            "Inserted action: %s, related to app: %s with delay: %dms",
            action.name, app.name, delay * 1000,
        )
