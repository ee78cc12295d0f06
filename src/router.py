"""RequestRouter: pure pipeline logic, independent of the transport."""
import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

from src.constants import (
    MSG_ERR_CHAT_FAILED,
    MSG_ERR_MESSAGE_REQUIRED,
    MSG_ERR_NO_IMAGE,
    MSG_IMAGE_DEFAULT_PROMPT,
    MSG_ERR_VISION_FAILED,
    MSG_LOG_CHAT_ERROR,
    MSG_LOG_DISPATCH_TEXT,
    MSG_LOG_DISPATCH_VISION,
    MSG_LOG_VISION_ERROR,
)
from src.errors import ClientInputError, InferenceError, ModelInvocationError
from src.inference.client import TextCompletionClient, VisionClient
from src.media import encoder
from src.media.uploads import UploadLifecycleManager
from src.messages import ChatReply, TextRequest, VisionReply, utc_timestamp

logger = logging.getLogger(__name__)


# ── pure helpers (module-level so tests can import them directly) ──────────────


def validate_message(message: Any) -> TextRequest:
    """Absent, null, empty or non-string messages are a client error. No trimming."""
    match message:
        case str() as text if text:
            return TextRequest(content=text)
        case _:
            raise ClientInputError(MSG_ERR_MESSAGE_REQUIRED)


# ── router ────────────────────────────────────────────────────────────────────


class RequestRouter:
    """Routes a text message or an uploaded image to the matching model client."""

    def __init__(
        self,
        text_client: TextCompletionClient,
        vision_client: VisionClient,
        uploads: UploadLifecycleManager,
    ) -> None:
        self._text_client = text_client
        self._vision_client = vision_client
        self._uploads = uploads

    async def handle_text(self, message: Any) -> ChatReply:
        request = validate_message(message)
        logger.info(MSG_LOG_DISPATCH_TEXT, type(self._text_client).__name__)
        try:
            result = await self._text_client.complete(request.content)
        except ModelInvocationError as exc:
            logger.error(MSG_LOG_CHAT_ERROR, exc.__cause__ or exc)
            raise InferenceError(MSG_ERR_CHAT_FAILED) from exc
        return ChatReply(reply=result.text, timestamp=utc_timestamp())

    async def handle_image(
        self, artifact: Optional[Path], prompt: str = MSG_IMAGE_DEFAULT_PROMPT
    ) -> VisionReply:
        match artifact:
            case None:
                raise ClientInputError(MSG_ERR_NO_IMAGE)
            case _:
                pass

        logger.info(MSG_LOG_DISPATCH_VISION, type(self._vision_client).__name__)
        try:
            image_b64 = await asyncio.to_thread(encoder.encode, artifact)
            result = await self._vision_client.analyze(image_b64, prompt)
        except (ModelInvocationError, OSError) as exc:
            logger.error(MSG_LOG_VISION_ERROR, exc.__cause__ or exc)
            raise InferenceError(MSG_ERR_VISION_FAILED) from exc
        finally:
            await self._uploads.discard(artifact)
        return VisionReply(analysis=result.text, timestamp=utc_timestamp())
