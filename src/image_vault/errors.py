"""Domain level exceptions mapped onto HTTP statuses at the request boundary."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

__all__ = [
    "AssetVaultError",
    "ConfigError",
    "UnauthorizedError",
    "MalformedHeaderError",
    "UnexpectedSigningMethodError",
    "InvalidTokenError",
    "AssetValidationError",
    "PayloadTooLargeError",
    "UnsupportedMediaTypeError",
    "MissingExtensionError",
    "InvalidAssetNameError",
    "StorageError",
    "GarbageCollectionError",
    "error_response",
    "asset_vault_error_handler",
    "request_validation_error_handler",
]


class ConfigError(RuntimeError):
    """Raised when mandatory startup configuration is missing."""


class AssetVaultError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(AssetVaultError):
    """Base class for rejected bearer credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"

    @property
    def reason(self) -> str:
        return self.message


class MalformedHeaderError(UnauthorizedError):
    default_message = "malformed header"


class UnexpectedSigningMethodError(UnauthorizedError):
    default_message = "unexpected signing method"


class InvalidTokenError(UnauthorizedError):
    default_message = "invalid token"


class AssetValidationError(AssetVaultError):
    """Raised when an upload or a name violates the store policy."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "invalid request"


class PayloadTooLargeError(AssetValidationError):
    status_code = 413
    default_message = "file size exceeds the upload limit"


class UnsupportedMediaTypeError(AssetValidationError):
    default_message = "file type is not allowed"


class MissingExtensionError(AssetValidationError):
    default_message = "file name has no extension"


class InvalidAssetNameError(AssetValidationError):
    default_message = "invalid image name"


class StorageError(AssetVaultError):
    """Raised when the images directory cannot be written, listed or pruned."""

    default_message = "storage error"


class GarbageCollectionError(StorageError):
    """Raised when a sweep aborts; ``removed`` lists orphans already deleted."""

    default_message = "garbage collect error"

    def __init__(self, message: str | None = None, *, removed: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.removed = removed


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": status_code, "message": message},
    )


async def asset_vault_error_handler(_: Request, exc: AssetVaultError) -> JSONResponse:
    """Convert :class:`AssetVaultError` exceptions into JSON payloads."""

    return error_response(exc.status_code, exc.message)


async def request_validation_error_handler(
    _: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as plain ``400`` responses."""

    fields = sorted(
        {".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()}
    )
    message = "invalid request"
    if fields:
        message = f"invalid request: {', '.join(fields)}"
    return error_response(status.HTTP_400_BAD_REQUEST, message)
