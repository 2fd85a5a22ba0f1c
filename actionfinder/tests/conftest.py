"""Shared test fixtures for actionfinder tests."""

import json
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from actionfinder.db.session import build_session_factory
from actionfinder.models.catalog import Base
from actionfinder.pipeline.catalog_generator import CatalogGenerator
from actionfinder.pipeline.delay import NoDelay
from actionfinder.pipeline.seeding_pipeline import SeedingPipeline
from actionfinder.schemas.catalog import App
from actionfinder.services.seed_service import SeedService
from actionfinder.services.similarity_service import SimilarityResolver
from actionfinder.tests.fakes import FakeEmbedder, FakeGenerativeProvider, InMemoryCatalogStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SAMPLE_CATALOG = [
    {
        "name": "gmail",
        "description": "Send emails with Google Mail.",
        "actions": [
            {"name": "send_email", "description": "Send an email to a recipient."},
            {"name": "forward_email", "description": "Forward an existing email."},
            {"name": "apply_label", "description": "Apply a label to an email."},
        ],
    },
    {
        "name": "hubspot",
        "description": "CRM platform for marketing and sales.",
        "actions": [
            {"name": "create_contact", "description": "Create a new contact in the CRM."},
            {"name": "update_deal", "description": "Update the stage of a deal."},
            {"name": "add_note", "description": "Attach a note to a contact."},
        ],
    },
    {
        "name": "slack",
        "description": "Team messaging and collaboration.",
        "actions": [
            {"name": "post_message", "description": "Post a message to a channel."},
            {"name": "create_channel", "description": "Create a new channel."},
            {"name": "invite_user", "description": "Invite a user to a channel."},
        ],
    },
]


@pytest.fixture
def sample_catalog_json() -> str:
    return json.dumps(SAMPLE_CATALOG)


@pytest.fixture
def sample_catalog() -> list[App]:
    return [App.model_validate(app) for app in SAMPLE_CATALOG]


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def fake_store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore()


@pytest.fixture
def fake_generator_provider(sample_catalog_json) -> FakeGenerativeProvider:
    return FakeGenerativeProvider(content=sample_catalog_json)


@pytest.fixture
def pipeline(fake_store, fake_embedder) -> SeedingPipeline:
    return SeedingPipeline(fake_store, fake_embedder, NoDelay())


@pytest.fixture
def seed_service(fake_generator_provider, pipeline) -> SeedService:
    return SeedService(CatalogGenerator(fake_generator_provider), pipeline)


@pytest.fixture
def resolver(fake_embedder, fake_store) -> SimilarityResolver:
    return SimilarityResolver(fake_embedder, fake_store)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture
async def test_session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_app(resolver, seed_service):
    from actionfinder.api.v1.deps import get_seed_service, get_similarity_resolver
    from actionfinder.main import app

    app.dependency_overrides[get_similarity_resolver] = lambda: resolver
    app.dependency_overrides[get_seed_service] = lambda: seed_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
