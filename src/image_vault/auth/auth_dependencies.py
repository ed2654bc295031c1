"""Common authentication dependencies for FastAPI routers."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import Depends, Header, Request

from ..errors import UnauthorizedError
from .token_validator import TokenValidator

logger = structlog.get_logger(__name__)


def get_token_validator(request: Request) -> TokenValidator:
    try:
        return request.app.state.token_validator  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("TokenValidator is not configured") from exc


def client_ip(request: Request) -> str | None:
    if request.client:
        return request.client.host
    return None


def require_token(
    request: Request,
    authorization: str | None = Header(None),
    validator: TokenValidator = Depends(get_token_validator),
) -> dict[str, Any]:
    try:
        return validator.authorize(authorization)
    except UnauthorizedError as exc:
        logger.warning(
            "auth.token.rejected",
            reason=exc.reason,
            path=request.url.path,
            client_ip=client_ip(request),
        )
        raise


def require_gc_token(
    request: Request,
    authorization: str | None = Header(None),
    validator: TokenValidator = Depends(get_token_validator),
) -> dict[str, Any] | None:
    """Same as :func:`require_token` unless ``GC_REQUIRE_AUTH`` is disabled."""
    if not request.app.state.config.gc_require_auth:
        return None
    return require_token(request, authorization, validator)


__all__ = ["client_ip", "get_token_validator", "require_gc_token", "require_token"]
