import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from actionfinder.core.config import get_settings
from actionfinder.db.session import init_schema
from actionfinder.services.factory import build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: wire services and create tables
    services = build_services(get_settings())
    await init_schema(services.engine)
    app.state.services = services

    yield

    # Shutdown
    await services.aclose()


app = FastAPI(
    title="actionfinder",
    description="Synthetic app/action catalog with nearest-action lookup",
    version="1.0.0",
    lifespan=lifespan,
)

# Exception handlers
from actionfinder.core.exceptions import register_exception_handlers  # noqa: E402

register_exception_handlers(app)

# Routers
from actionfinder.api.v1.actions import router as actions_router  # noqa: E402

app.include_router(actions_router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
