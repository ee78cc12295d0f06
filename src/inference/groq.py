"""Groq text and vision backends over the OpenAI-compatible chat API."""
import asyncio
import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from src.constants import (
    DEFAULT_TEXT_MODEL,
    DEFAULT_VISION_MODEL,
    GROQ_BASE_URL,
    MAX_RETRIES,
    MAX_TOKENS,
    MSG_ERR_GENERATION_FAILED,
    MSG_ERR_MALFORMED_RESPONSE,
    MSG_ERR_VISION_FAILED,
    MSG_IMAGE_DEFAULT_PROMPT,
    MSG_LOG_TEXT_API_ERROR,
    MSG_LOG_VISION_API_ERROR,
    MSG_NO_ANALYSIS,
    MSG_NO_RESPONSE,
    TEMPERATURE,
)
from src.errors import ModelInvocationError
from src.inference.client import TextCompletionClient, VisionClient
from src.media.encoder import to_data_uri
from src.messages import InferenceResult

logger = logging.getLogger(__name__)


def _first_content(response: Any, placeholder: str) -> InferenceResult:
    """First choice's text; placeholder only for an empty list or empty content."""
    match response.choices:
        case []:
            return InferenceResult(text=placeholder)
        case [choice, *_]:
            return InferenceResult(text=choice.message.content or placeholder)
        case other:
            raise TypeError(MSG_ERR_MALFORMED_RESPONSE % type(other).__name__)


class _GroqChatClient:
    """Shared transport: one AsyncOpenAI per process, one call per request."""

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout: Optional[float] = None,
        base_url: str = GROQ_BASE_URL,
    ) -> None:
        self._model = model
        self._timeout = timeout
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=MAX_RETRIES,
        )

    @property
    def model(self) -> str:
        return self._model

    async def _create(self, messages: list[dict]) -> Any:
        return await asyncio.wait_for(
            self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            ),
            timeout=self._timeout,
        )


class GroqTextClient(_GroqChatClient, TextCompletionClient):

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_TEXT_MODEL,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(api_key, model, timeout)

    async def complete(self, prompt: str) -> InferenceResult:
        try:
            response = await self._create([{"role": "user", "content": prompt}])
            return _first_content(response, MSG_NO_RESPONSE)
        except Exception as exc:
            logger.exception(MSG_LOG_TEXT_API_ERROR)
            raise ModelInvocationError(MSG_ERR_GENERATION_FAILED) from exc


class GroqVisionClient(_GroqChatClient, VisionClient):

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_VISION_MODEL,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(api_key, model, timeout)

    async def analyze(
        self, image_b64: str, prompt: str = MSG_IMAGE_DEFAULT_PROMPT
    ) -> InferenceResult:
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {
                        "type": "image_url",
                        "image_url": {"url": to_data_uri(image_b64)},
                    },
                ],
            }
        ]
        try:
            response = await self._create(messages)
            return _first_content(response, MSG_NO_ANALYSIS)
        except Exception as exc:
            logger.exception(MSG_LOG_VISION_API_ERROR)
            raise ModelInvocationError(MSG_ERR_VISION_FAILED) from exc
