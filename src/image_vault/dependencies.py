"""Dependency wiring helpers."""

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .auth.token_validator import TokenValidator
from .config import AppConfig
from .errors import (
    AssetVaultError,
    asset_vault_error_handler,
    request_validation_error_handler,
)
from .ingest.ingest_api import router as ingest_router
from .ingest.ingest_service import IngestService
from .ingest.validation import UploadValidator
from .media.asset_store import AssetStore
from .media.deletion import DeletionService
from .media.garbage_collector import GarbageCollector
from .media.media_api import router as media_router

logger = structlog.get_logger(__name__)


def healthz() -> PlainTextResponse:
    return PlainTextResponse("OK")


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    store = AssetStore(
        root=config.images_dir,
        chunk_size_bytes=config.upload_limits.chunk_size_bytes,
    )
    store.ensure_structure()

    app.state.config = config
    app.state.token_validator = TokenValidator(secret=config.jwt_secret)
    app.state.asset_store = store
    app.state.ingest_service = IngestService(
        store=store,
        validator=UploadValidator(config.upload_limits),
        base_url=config.base_url,
    )
    app.state.deletion_service = DeletionService(store=store)
    app.state.garbage_collector = GarbageCollector(store=store)

    if "*" in config.cors_allowed_origins:
        logger.warning("cors.allow_all_origins", hint="set CORS_ALLOWED_ORIGINS")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AssetVaultError, asset_vault_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.add_api_route("/healthz", healthz, methods=["GET"], tags=["health"])
    app.include_router(ingest_router)
    # DELETE /images/{name} must be registered before the static mount claims /images
    app.include_router(media_router)
    app.mount("/images", StaticFiles(directory=config.images_dir), name="images")
