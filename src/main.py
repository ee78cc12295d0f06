"""Entry point: wires Config → Groq clients → FastAPI app → uvicorn."""
import logging

import uvicorn
from rich.logging import RichHandler

from src.api.server import create_app
from src.config import Config
from src.constants import MSG_SERVER_STARTING, MSG_TEST_ENDPOINT, ROUTE_TEST
from src.inference.groq import GroqTextClient, GroqVisionClient
from src.media.uploads import UploadLifecycleManager


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)

    text_client = GroqTextClient(
        config.groq_api_key, config.text_model, config.inference_timeout
    )
    vision_client = GroqVisionClient(
        config.groq_api_key, config.vision_model, config.inference_timeout
    )
    uploads = UploadLifecycleManager(config.upload_dir)
    app = create_app(config, text_client, vision_client, uploads)

    logger.info(MSG_SERVER_STARTING, config.port)
    logger.info(MSG_TEST_ENDPOINT, config.port, ROUTE_TEST)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
