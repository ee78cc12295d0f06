from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

from src.constants import MSG_IMAGE_DEFAULT_PROMPT


@dataclass(frozen=True)
class TextRequest:
    content: str


@dataclass(frozen=True)
class ImageRequest:
    content: bytes
    prompt: str = MSG_IMAGE_DEFAULT_PROMPT


@dataclass(frozen=True)
class InferenceResult:
    text: str


@dataclass(frozen=True)
class ChatReply:
    reply: str
    timestamp: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class VisionReply:
    analysis: str
    timestamp: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def resolve_prompt(prompt: Optional[str]) -> str:
    """Blank or missing prompts fall back to the default image question."""
    match prompt:
        case str() as p if p.strip():
            return p
        case _:
            return MSG_IMAGE_DEFAULT_PROMPT


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing ``Z``."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
