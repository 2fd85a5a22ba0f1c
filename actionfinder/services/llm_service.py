"""OpenAI chat wrapper: AsyncOpenAI + token usage logging + error classification."""

import logging

from openai import AsyncOpenAI, OpenAIError

from actionfinder.core.exceptions import GenerationError, classify_api_error

logger = logging.getLogger(__name__)


class OpenAIGenerativeProvider:
    def __init__(self, client: AsyncOpenAI, model: str) -> None:
        self._client = client
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, prompt: str) -> str:
        """Send the prompt as a single system message and return the reply text."""
        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "system", "content": prompt}],
            )
        except OpenAIError as e:
            logger.error("OpenAI API call failed [%s]", self._model, exc_info=True)
            raise GenerationError(classify_api_error(e)) from e

        if completion.usage:
            logger.info(
                "Token usage [%s] - prompt: %d, completion: %d, total: %d",
                self._model,
                completion.usage.prompt_tokens,
                completion.usage.completion_tokens,
                completion.usage.total_tokens,
            )

        content = None
        if completion.choices:
            content = completion.choices[0].message.content

        if not content:
            raise GenerationError("OpenAI response had no content.")

        return content
