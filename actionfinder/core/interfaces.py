"""
Narrow interfaces the core depends on. The catalog generator, seeding
pipeline and similarity resolver only see these protocols, so the OpenAI
clients and the PostgreSQL store can be swapped for fakes in tests.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np

from actionfinder.models.domain import NearestAction


class EmbeddingProvider(Protocol):
    @property
    def model(self) -> str: ...

    async def embed(self, text: str) -> np.ndarray: ...


class GenerativeProvider(Protocol):
    async def generate(self, prompt: str) -> str: ...


class CatalogStore(Protocol):
    async def insert_app(self, name: str, description: str) -> int: ...

    async def insert_action(
        self,
        app_id: int,
        name: str,
        description: str,
        embedding: np.ndarray,
        embedding_model: str,
    ) -> int: ...

    async def find_nearest_action(
        self, embedding: np.ndarray, embedding_model: str
    ) -> NearestAction | None: ...


class DelayStrategy(Protocol):
    def next_delay(self) -> float:
        """Seconds to wait before the next insert."""
        ...
