"""Tests for the OpenAI embedding and chat wrappers against a mocked AsyncOpenAI."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import numpy as np
import openai
import pytest

from actionfinder.core.exceptions import EmbeddingError, GenerationError
from actionfinder.services.embedding_service import OpenAIEmbeddingProvider
from actionfinder.services.llm_service import OpenAIGenerativeProvider

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/test")


def _embedding_client(response=None, error=None) -> MagicMock:
    client = MagicMock()
    client.embeddings.create = AsyncMock(return_value=response, side_effect=error)
    return client


def _chat_client(response=None, error=None) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response, side_effect=error)
    return client


def _completion(content: str | None, usage=None):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=usage,
    )


# --- Embeddings ---


@pytest.mark.asyncio
async def test_embed_returns_float32_first_vector():
    response = SimpleNamespace(data=[
        SimpleNamespace(embedding=[0.25] * 1536),
        SimpleNamespace(embedding=[0.5] * 1536),
    ])
    client = _embedding_client(response)
    provider = OpenAIEmbeddingProvider(client, "text-embedding-3-small")

    vector = await provider.embed("create a contact")

    assert vector.dtype == np.float32
    assert vector.shape == (1536,)
    assert vector[0] == pytest.approx(0.25)
    client.embeddings.create.assert_awaited_once_with(model="text-embedding-3-small", input="create a contact")
    assert provider.model == "text-embedding-3-small"


@pytest.mark.asyncio
async def test_embed_without_data_raises():
    provider = OpenAIEmbeddingProvider(_embedding_client(SimpleNamespace(data=[])), "m")
    with pytest.raises(EmbeddingError):
        await provider.embed("text")


@pytest.mark.asyncio
async def test_embed_wrong_dimension_raises():
    response = SimpleNamespace(data=[SimpleNamespace(embedding=[0.1] * 3)])
    provider = OpenAIEmbeddingProvider(_embedding_client(response), "m")
    with pytest.raises(EmbeddingError, match="1536"):
        await provider.embed("text")


@pytest.mark.asyncio
async def test_embed_connection_error_is_classified():
    client = _embedding_client(error=openai.APIConnectionError(request=_REQUEST))
    provider = OpenAIEmbeddingProvider(client, "m")
    with pytest.raises(EmbeddingError, match="connect") as exc_info:
        await provider.embed("text")
    assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)


# --- Chat completions ---


@pytest.mark.asyncio
async def test_generate_sends_single_system_message():
    usage = SimpleNamespace(prompt_tokens=10, completion_tokens=20, total_tokens=30)
    client = _chat_client(_completion("[]", usage=usage))
    provider = OpenAIGenerativeProvider(client, "gpt-4o-2024-08-06")

    content = await provider.generate("make apps")

    assert content == "[]"
    client.chat.completions.create.assert_awaited_once_with(
        model="gpt-4o-2024-08-06",
        messages=[{"role": "system", "content": "make apps"}],
    )


@pytest.mark.asyncio
async def test_generate_without_content_raises():
    provider = OpenAIGenerativeProvider(_chat_client(_completion(None)), "m")
    with pytest.raises(GenerationError):
        await provider.generate("make apps")


@pytest.mark.asyncio
async def test_generate_without_choices_raises():
    provider = OpenAIGenerativeProvider(_chat_client(SimpleNamespace(choices=[], usage=None)), "m")
    with pytest.raises(GenerationError):
        await provider.generate("make apps")


@pytest.mark.asyncio
async def test_generate_auth_error_is_classified():
    error = openai.AuthenticationError(
        "Incorrect API key provided",
        response=httpx.Response(401, request=_REQUEST),
        body=None,
    )
    provider = OpenAIGenerativeProvider(_chat_client(error=error), "m")
    with pytest.raises(GenerationError, match="authentication"):
        await provider.generate("make apps")


@pytest.mark.asyncio
async def test_generate_rate_limit_is_classified():
    error = openai.RateLimitError(
        "Rate limit reached",
        response=httpx.Response(429, request=_REQUEST),
        body=None,
    )
    provider = OpenAIGenerativeProvider(_chat_client(error=error), "m")
    with pytest.raises(GenerationError, match="rate limit"):
        await provider.generate("make apps")
