"""ASGI entry point: ``uvicorn image_vault.main:app``."""

from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Wire the asset store, its services and routes from ``config``.

    Without an explicit ``config`` the environment is read through
    :func:`load_config`, which fails fast when ``JWT_SECRET_KEY`` is missing.
    """
    cfg = config or load_config()
    configure_logging(cfg.log_level)
    app = FastAPI(title="image-vault", summary="Token-gated image storage")
    include_routers(app, cfg)
    return app


app = create_app()
