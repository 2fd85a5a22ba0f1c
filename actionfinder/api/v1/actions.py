import logging

from fastapi import APIRouter, Depends, Query

from actionfinder.api.v1.deps import get_seed_service, get_similarity_resolver
from actionfinder.schemas.catalog import NearestActionResponse, SeedResponse
from actionfinder.services.seed_service import SeedService
from actionfinder.services.similarity_service import SimilarityResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["actions"])


@router.get("/actions/nearest", response_model=NearestActionResponse)
async def find_nearest_action(
    query: str = Query(..., min_length=1, max_length=2000),
    resolver: SimilarityResolver = Depends(get_similarity_resolver),
):
    match = await resolver.find_nearest(query)
    return NearestActionResponse(
        app_id=match.app_id,
        app_name=match.app_name,
        action_id=match.action_id,
        action_name=match.action_name,
        action_description=match.action_description,
        distance=match.distance,
    )


@router.post("/catalog/seed", response_model=SeedResponse)
async def seed_catalog(seed_service: SeedService = Depends(get_seed_service)):
    report = await seed_service.seed()
    logger.info("Catalog seeded via API: %d apps, %d actions", report.apps, report.actions)
    return SeedResponse(apps=report.apps, actions=report.actions)
