from fastapi import Request

from actionfinder.services.factory import Services
from actionfinder.services.seed_service import SeedService
from actionfinder.services.similarity_service import SimilarityResolver


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_similarity_resolver(request: Request) -> SimilarityResolver:
    return get_services(request).resolver


def get_seed_service(request: Request) -> SeedService:
    return get_services(request).seed_service
