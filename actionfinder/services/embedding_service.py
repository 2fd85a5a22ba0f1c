import logging

import numpy as np
from openai import AsyncOpenAI, OpenAIError

from actionfinder.core.exceptions import EmbeddingError, classify_api_error
from actionfinder.models.catalog import EMBEDDING_DIMENSIONS

logger = logging.getLogger(__name__)


class OpenAIEmbeddingProvider:
    """Embeds text with the OpenAI embeddings API as a float32 vector."""

    def __init__(self, client: AsyncOpenAI, model: str, dimensions: int = EMBEDDING_DIMENSIONS) -> None:
        self._client = client
        self._model = model
        self._dimensions = dimensions

    @property
    def model(self) -> str:
        return self._model

    async def embed(self, text: str) -> np.ndarray:
        try:
            response = await self._client.embeddings.create(model=self._model, input=text)
        except OpenAIError as e:
            logger.error("OpenAI embedding call failed [%s]", self._model, exc_info=True)
            raise EmbeddingError(classify_api_error(e)) from e

        if not response.data:
            raise EmbeddingError("OpenAI embedding response contained no vector.")

        # float32 downcasting keeps stored and query vectors identical
        vector = np.asarray(response.data[0].embedding, dtype=np.float32)
        if vector.shape != (self._dimensions,):
            raise EmbeddingError(
                f"Expected a {self._dimensions}-dim embedding from {self._model}, got {vector.size}"
            )
        return vector
