import logging

from actionfinder.core.exceptions import NoMatch
from actionfinder.core.interfaces import CatalogStore, EmbeddingProvider
from actionfinder.models.domain import NearestAction

logger = logging.getLogger(__name__)


class SimilarityResolver:
    """Embeds a free-text request and returns the single closest stored action."""

    def __init__(self, embedder: EmbeddingProvider, store: CatalogStore) -> None:
        self._embedder = embedder
        self._store = store

    async def find_nearest(self, query: str) -> NearestAction:
        if not query.strip():
            raise ValueError("Query text must not be empty")

        embedding = await self._embedder.embed(query)
        match = await self._store.find_nearest_action(embedding, self._embedder.model)
        if match is None:
            raise NoMatch(f"No stored action embedded with {self._embedder.model} to match against.")

        logger.info(
            "Nearest action for %r: %s / %s (distance=%.4f)",
            query, match.app_name, match.action_name, match.distance,
        )
        return match
