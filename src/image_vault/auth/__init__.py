"""Bearer token checks guarding mutating endpoints."""

from .token_validator import HMAC_ALGORITHMS, TokenValidator

__all__ = ["HMAC_ALGORITHMS", "TokenValidator"]
