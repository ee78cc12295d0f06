from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from src.constants import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TEXT_MODEL,
    DEFAULT_UPLOAD_DIR,
    DEFAULT_VISION_MODEL,
    DEV_ORIGINS,
    PRODUCTION_ENVIRONMENT,
)


@dataclass(frozen=True)
class Config:
    groq_api_key: str
    host: str
    port: int
    environment: str
    frontend_url: Optional[str]
    log_level: str
    upload_dir: str
    text_model: str
    vision_model: str
    inference_timeout: Optional[float]

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION_ENVIRONMENT

    @property
    def allowed_origins(self) -> list[str]:
        match (self.is_production, self.frontend_url):
            case (True, str() as url):
                return [url]
            case _:
                return list(DEV_ORIGINS)

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        api_key = os.getenv("GROQ_API_KEY")
        host = os.getenv("HOST", DEFAULT_HOST)
        port = os.getenv("PORT", DEFAULT_PORT)
        environment = os.getenv("NODE_ENV", DEFAULT_ENVIRONMENT)
        frontend_url = os.getenv("FRONTEND_URL") or None
        log_level = os.getenv("LOG_LEVEL", "INFO")
        upload_dir = os.getenv("UPLOAD_DIR", DEFAULT_UPLOAD_DIR)
        text_model = os.getenv("GROQ_TEXT_MODEL") or DEFAULT_TEXT_MODEL
        vision_model = os.getenv("GROQ_VISION_MODEL") or DEFAULT_VISION_MODEL
        raw_timeout = os.getenv("INFERENCE_TIMEOUT", "0")

        # 0 disables the deadline on the model call.
        timeout = float(raw_timeout or 0)

        return cls._validate(
            groq_api_key=api_key,
            host=host,
            port=int(port),
            environment=environment.strip().lower(),
            frontend_url=frontend_url,
            log_level=log_level,
            upload_dir=upload_dir,
            text_model=text_model,
            vision_model=vision_model,
            inference_timeout=timeout if timeout > 0 else None,
        )

    @staticmethod
    def _validate(
        groq_api_key: Optional[str],
        host: str,
        port: int,
        environment: str,
        frontend_url: Optional[str],
        log_level: str,
        upload_dir: str,
        text_model: str,
        vision_model: str,
        inference_timeout: Optional[float],
    ) -> "Config":
        match groq_api_key:
            case None | "":
                raise ValueError("GROQ_API_KEY environment variable is not set")
            case _:
                pass

        match (environment, frontend_url):
            case (env, None) if env == PRODUCTION_ENVIRONMENT:
                raise ValueError("FRONTEND_URL must be set when NODE_ENV=production")
            case _:
                pass

        return Config(
            groq_api_key=groq_api_key,
            host=host,
            port=port,
            environment=environment,
            frontend_url=frontend_url,
            log_level=log_level,
            upload_dir=upload_dir,
            text_model=text_model,
            vision_model=vision_model,
            inference_timeout=inference_timeout,
        )
