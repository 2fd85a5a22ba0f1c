import logging
from collections.abc import Awaitable, Callable

from actionfinder.models.domain import SeedReport
from actionfinder.pipeline.catalog_generator import CatalogGenerator
from actionfinder.pipeline.seeding_pipeline import SeedingPipeline

logger = logging.getLogger(__name__)


class SeedService:
    def __init__(
        self,
        generator: CatalogGenerator,
        pipeline: SeedingPipeline,
        *,
        prepare_store: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._generator = generator
        self._pipeline = pipeline
        self._prepare_store = prepare_store

    async def seed(self) -> SeedReport:
        """Generate a fresh catalog and seed it. Nothing touches the store if generation fails."""
        logger.info("Seeding start")
        catalog = await self._generator.generate_catalog()
        if self._prepare_store is not None:
            await self._prepare_store()
        report = await self._pipeline.seed(catalog)
        logger.info("Seeding finish")
        return report
