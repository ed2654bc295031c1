"""Generated asset names: ``<uuid4>.<extension>``."""

from __future__ import annotations

import re
import uuid

from ..errors import MissingExtensionError

# extensions end up verbatim in the public URL path
EXTENSION_PATTERN = re.compile(r"[a-z0-9]+")


def extract_extension(filename: str | None) -> str:
    """Return the lower-cased suffix after the final ``.`` of ``filename``.

    Only ASCII letters and digits are accepted, anything else raises
    :class:`MissingExtensionError`.
    """
    if not filename or "." not in filename:
        raise MissingExtensionError()
    extension = filename.rsplit(".", 1)[1].lower()
    if not EXTENSION_PATTERN.fullmatch(extension):
        raise MissingExtensionError()
    return extension


def new_asset_name(extension: str) -> str:
    # uniqueness rests on uuid4 randomness, the store never checks for clashes
    return f"{uuid.uuid4()}.{extension}"


def generate_asset_name(filename: str | None) -> str:
    return new_asset_name(extract_extension(filename))


__all__ = ["EXTENSION_PATTERN", "extract_extension", "generate_asset_name", "new_asset_name"]
