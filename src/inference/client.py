"""Abstract inference backends, injected into the router."""
from abc import ABC, abstractmethod

from src.constants import MSG_IMAGE_DEFAULT_PROMPT
from src.messages import InferenceResult


class TextCompletionClient(ABC):
    @abstractmethod
    async def complete(self, prompt: str) -> InferenceResult:
        """Generate a reply for the prompt. Raises ModelInvocationError on failure."""
        ...


class VisionClient(ABC):
    @abstractmethod
    async def analyze(
        self, image_b64: str, prompt: str = MSG_IMAGE_DEFAULT_PROMPT
    ) -> InferenceResult:
        """Describe a base64 image. Raises ModelInvocationError on failure."""
        ...
