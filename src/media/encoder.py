"""Media encoder: upload file → base64 text → data URI."""
import base64
from pathlib import Path

from src.constants import DATA_URI_TEMPLATE, IMAGE_MEDIA_TYPE


def encode(path: Path | str) -> str:
    """Read the whole file and return it as standard base64. OSError propagates."""
    return base64.standard_b64encode(Path(path).read_bytes()).decode()


def to_data_uri(image_b64: str, media_type: str = IMAGE_MEDIA_TYPE) -> str:
    return DATA_URI_TEMPLATE % (media_type, image_b64)
