"""HTTP transport via FastAPI: parses requests, hands them to RequestRouter."""
import logging
from typing import Any, Optional

from fastapi import APIRouter, FastAPI, File, Form, Request, UploadFile
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import Config
from src.constants import (
    FIELD_IMAGE,
    FIELD_MESSAGE,
    FIELD_PROMPT,
    MSG_ERR_NO_IMAGE,
    MSG_ERR_VISION_FAILED,
    MSG_LOG_BODY_REJECTED,
    MSG_LOG_PERSIST_FAILED,
    MSG_SERVER_RUNNING,
    ROUTE_CHAT_MESSAGE,
    ROUTE_HEALTH,
    ROUTE_TEST,
    ROUTE_VISION_ANALYZE,
)
from src.errors import ClientInputError, GatewayError, InferenceError
from src.inference.client import TextCompletionClient, VisionClient
from src.media.uploads import UploadLifecycleManager
from src.messages import ImageRequest, resolve_prompt
from src.router import RequestRouter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["gateway"])


# ── request parsing helpers ───────────────────────────────────────────────────


async def _json_body(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        return {}
    match payload:
        case dict():
            return payload
        case _:
            return {}


async def _read_image(
    upload: Optional[UploadFile], prompt: Optional[str]
) -> Optional[ImageRequest]:
    """Turn the multipart ``image`` field into an ImageRequest, or None if absent/empty.

    The prompt is resolved here, once; everything downstream passes it through.
    """
    match upload:
        case None:
            return None
        case _:
            try:
                content = await upload.read()
            finally:
                await upload.close()
    match content:
        case b"":
            return None
        case data:
            return ImageRequest(content=data, prompt=resolve_prompt(prompt))


def _pipeline(request: Request) -> RequestRouter:
    return request.app.state.pipeline


# ── routes ────────────────────────────────────────────────────────────────────


@router.get(ROUTE_TEST)
async def server_check() -> dict[str, str]:
    return {"message": MSG_SERVER_RUNNING}


@router.get(ROUTE_HEALTH)
async def health(request: Request) -> dict[str, Any]:
    uploads: UploadLifecycleManager = request.app.state.uploads
    return {"status": "ok", "upload_cleanup_failures": uploads.cleanup_failures}


@router.post(ROUTE_CHAT_MESSAGE)
async def chat_message(request: Request) -> dict[str, str]:
    payload = await _json_body(request)
    reply = await _pipeline(request).handle_text(payload.get(FIELD_MESSAGE))
    return reply.to_dict()


@router.post(ROUTE_VISION_ANALYZE)
async def vision_analyze(
    request: Request,
    image: Optional[UploadFile] = File(None, alias=FIELD_IMAGE),
    prompt: Optional[str] = Form(None, alias=FIELD_PROMPT),
) -> dict[str, str]:
    match await _read_image(image, prompt):
        case None:
            raise ClientInputError(MSG_ERR_NO_IMAGE)
        case ImageRequest(content=content, prompt=resolved):
            uploads: UploadLifecycleManager = request.app.state.uploads
            try:
                artifact = await uploads.persist(content)
            except OSError as exc:
                logger.exception(MSG_LOG_PERSIST_FAILED)
                raise InferenceError(MSG_ERR_VISION_FAILED) from exc

    reply = await _pipeline(request).handle_image(artifact, resolved)
    return reply.to_dict()


# ── error rendering ───────────────────────────────────────────────────────────


async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _body_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """A vision body that cannot be parsed into an image counts as no image."""
    match exc:
        case RequestValidationError() if request.url.path == ROUTE_VISION_ANALYZE:
            pass
        case StarletteHTTPException(status_code=400) if request.url.path == ROUTE_VISION_ANALYZE:
            pass
        case RequestValidationError():
            return await request_validation_exception_handler(request, exc)
        case _:
            return await http_exception_handler(request, exc)
    logger.warning(MSG_LOG_BODY_REJECTED, exc)
    return await _gateway_error_handler(request, ClientInputError(MSG_ERR_NO_IMAGE))


# ── app factory ───────────────────────────────────────────────────────────────


def create_app(
    config: Config,
    text_client: TextCompletionClient,
    vision_client: VisionClient,
    uploads: Optional[UploadLifecycleManager] = None,
) -> FastAPI:
    uploads = uploads or UploadLifecycleManager(config.upload_dir)

    app = FastAPI(title="Inference Gateway", version="0.1.0")
    app.state.config = config
    app.state.uploads = uploads
    app.state.pipeline = RequestRouter(text_client, vision_client, uploads)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, _body_error_handler)
    app.add_exception_handler(RequestValidationError, _body_error_handler)
    app.include_router(router)
    return app
