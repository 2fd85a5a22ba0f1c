from dataclasses import dataclass

from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncEngine

from actionfinder.core.config import Settings
from actionfinder.db.session import build_engine, build_session_factory, init_schema
from actionfinder.pipeline.catalog_generator import CatalogGenerator
from actionfinder.pipeline.delay import UniformRandomDelay
from actionfinder.pipeline.seeding_pipeline import SeedingPipeline
from actionfinder.services.catalog_store import SqlCatalogStore
from actionfinder.services.embedding_service import OpenAIEmbeddingProvider
from actionfinder.services.llm_service import OpenAIGenerativeProvider
from actionfinder.services.seed_service import SeedService
from actionfinder.services.similarity_service import SimilarityResolver


@dataclass
class Services:
    engine: AsyncEngine
    openai_client: AsyncOpenAI
    store: SqlCatalogStore
    seed_service: SeedService
    resolver: SimilarityResolver

    async def aclose(self) -> None:
        await self.openai_client.close()
        await self.engine.dispose()


def build_services(settings: Settings) -> Services:
    engine = build_engine(settings.database_url, echo=settings.database_echo)
    store = SqlCatalogStore(build_session_factory(engine))

    client = AsyncOpenAI(api_key=settings.openai_api_key)
    embedder = OpenAIEmbeddingProvider(client, settings.openai_embedding_model)
    generator = CatalogGenerator(
        OpenAIGenerativeProvider(client, settings.openai_chat_model),
        app_count=settings.seed_app_count,
        min_actions_per_app=settings.seed_min_actions_per_app,
    )
    pipeline = SeedingPipeline(
        store,
        embedder,
        UniformRandomDelay(settings.seed_delay_min_ms, settings.seed_delay_max_ms),
    )

    return Services(
        engine=engine,
        openai_client=client,
        store=store,
        seed_service=SeedService(generator, pipeline, prepare_store=lambda: init_schema(engine)),
        resolver=SimilarityResolver(embedder, store),
    )
