"""Bearer token validation against the backend's shared HMAC secret."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import jwt
import structlog
from jwt import InvalidTokenError as PyJWTInvalidTokenError

from ..errors import (
    InvalidTokenError,
    MalformedHeaderError,
    UnauthorizedError,
    UnexpectedSigningMethodError,
)

logger = structlog.get_logger(__name__)

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")
BEARER_SCHEME = "bearer"


@dataclass(slots=True, frozen=True)
class TokenValidator:
    """Decide whether an ``Authorization`` header carries a valid token.

    The token content is not inspected beyond signature, expiry and
    structure: holding a token signed with the shared secret is the whole
    authorization signal.
    """

    secret: str

    def authorize(self, header: str | None) -> dict[str, Any]:
        """Return verified claims or raise an :class:`UnauthorizedError`."""
        token = self._extract_token(header)

        try:
            unverified = jwt.get_unverified_header(token)
        except PyJWTInvalidTokenError as exc:
            raise InvalidTokenError() from exc

        algorithm = unverified.get("alg")
        if algorithm not in HMAC_ALGORITHMS:
            raise UnexpectedSigningMethodError(
                f"unexpected signing method: {algorithm}"
            )

        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                self.secret,
                algorithms=list(HMAC_ALGORITHMS),
            )
        except PyJWTInvalidTokenError as exc:
            raise InvalidTokenError() from exc
        return claims

    def is_authorized(self, header: str | None) -> bool:
        try:
            self.authorize(header)
        except UnauthorizedError as exc:
            logger.info("auth.token.rejected", reason=exc.reason)
            return False
        return True

    @staticmethod
    def _extract_token(header: str | None) -> str:
        if not header:
            raise MalformedHeaderError()
        parts = header.split(" ")
        if len(parts) != 2:
            raise MalformedHeaderError()
        scheme, token = parts
        if scheme.lower() != BEARER_SCHEME or not token:
            raise MalformedHeaderError()
        return token


__all__ = ["HMAC_ALGORITHMS", "TokenValidator"]
