"""Catalog generator: one LLM call, strict parsing into a list of apps.

No retries and no repair beyond stripping Markdown code fences; a malformed
response is a ParseError for the caller.
"""

from __future__ import annotations

import logging
import re
from typing import Annotated

from pydantic import Field, TypeAdapter, ValidationError

from actionfinder.core.exceptions import ParseError
from actionfinder.core.interfaces import GenerativeProvider
from actionfinder.pipeline.prompt_builder import build_catalog_prompt
from actionfinder.schemas.catalog import App

logger = logging.getLogger(__name__)

_CATALOG_ADAPTER = TypeAdapter(Annotated[list[App], Field(min_length=1)])


def _strip_code_fences(text: str) -> str:
    """Remove surrounding ```...``` fences (with or without 'json') if present."""
    t = text.strip()
    if t.startswith("```") and t.endswith("```"):
        t = re.sub(r"^```[A-Za-z0-9_-]*\s*", "", t)
        t = re.sub(r"\s*```$", "", t)
    return t.strip()


def parse_catalog(content: str) -> list[App]:
    try:
        return _CATALOG_ADAPTER.validate_json(_strip_code_fences(content))
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(p) for p in first["loc"]) or "<root>"
        raise ParseError(f"Generated catalog is malformed at {location}: {first['msg']}") from e


class CatalogGenerator:
    def __init__(
        self,
        provider: GenerativeProvider,
        *,
        app_count: int = 3,
        min_actions_per_app: int = 3,
    ) -> None:
        self._provider = provider
        self._app_count = app_count
        self._min_actions = min_actions_per_app

    async def generate_catalog(self) -> list[App]:
        prompt = build_catalog_prompt(self._app_count, self._min_actions)
        content = await self._provider.generate(prompt)
        catalog = parse_catalog(content)

        if len(catalog) < self._app_count:
            logger.warning("Requested %d apps, generator returned %d", self._app_count, len(catalog))
        for app in catalog:
            if len(app.actions) < self._min_actions:
                logger.warning(
                    "App '%s' has %d actions, requested at least %d",
                    app.name, len(app.actions), self._min_actions,
                )

        logger.info(
            "Generated catalog: %d apps, %d actions",
            len(catalog), sum(len(app.actions) for app in catalog),
        )
        return catalog
