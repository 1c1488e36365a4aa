"""Share codes for characters and campaign saves.

A share code is the configured prefix (``AC-`` by default) followed by
the LZ-string base64 compression of the JSON payload
``{"type", "version", "data"}``, made URL-safe (``+`` -> ``-``,
``/`` -> ``_``, no ``=`` padding). Codes are interchangeable with those of
the JavaScript lz-string library.

Generation and parsing report failures as results rather than raising, so
a bad code pasted by a user never takes the caller down.

Example:
    >>> result = generate_share_code({"name": "Kai"}, "character")
    >>> parse_share_code(result.code).data.data
    {'name': 'Kai'}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from lzstring import LZString
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from atlas_cortex.core.config import ShareSettings, get_settings
from atlas_cortex.core.logging import get_logger
from atlas_cortex.models.enums import ShareableType


logger = get_logger(__name__)

_lz = LZString()

INVALID_FORMAT = "Invalid share code format"
DECOMPRESS_FAILED = "Failed to decompress share code"
INVALID_STRUCTURE = "Invalid share code structure"
NEWER_VERSION = "Share code is from a newer version. Please update the app."


class ShareableData(BaseModel):
    """Payload carried by a share code."""

    model_config = ConfigDict(frozen=True)

    type: ShareableType
    version: int = Field(ge=1)
    data: Any


@dataclass(frozen=True)
class ShareCodeResult:
    """Outcome of generating a share code."""

    success: bool
    code: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ParseCodeResult:
    """Outcome of parsing a share code."""

    success: bool
    data: ShareableData | None = None
    error: str | None = None


def _serialize(value: Any) -> str:
    # ASCII escapes keep every character inside the 16-bit range lz-string encodes.
    return json.dumps(value, separators=(",", ":"), ensure_ascii=True, allow_nan=False)


def _to_url_safe(encoded: str) -> str:
    return encoded.replace("+", "-").replace("/", "_").rstrip("=")


def _from_url_safe(encoded: str) -> str:
    encoded = encoded.replace("-", "+").replace("_", "/")
    return encoded + "=" * (-len(encoded) % 4)


def generate_share_code(
    data: Any,
    share_type: ShareableType | str,
    *,
    settings: ShareSettings | None = None,
) -> ShareCodeResult:
    """Encode character or save data as a share code.

    Args:
        data: JSON-serializable payload (pydantic models are dumped by alias).
        share_type: "character" or "save".
        settings: Share settings; defaults to the global settings.

    Returns:
        The code, or the reason it could not be generated.
    """
    settings = settings or get_settings().share
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True, exclude_none=True)
    try:
        payload = {
            "type": ShareableType(share_type).value,
            "version": settings.current_version,
            "data": data,
        }
        encoded = _lz.compressToBase64(_serialize(payload))
    except (TypeError, ValueError) as exc:
        logger.warning("Share code generation failed", error=str(exc))
        return ShareCodeResult(success=False, error=str(exc) or "Failed to generate share code")
    code = settings.code_prefix + _to_url_safe(encoded)
    logger.debug("Share code generated", share_type=payload["type"], length=len(code))
    return ShareCodeResult(success=True, code=code)


def parse_share_code(code: str, *, settings: ShareSettings | None = None) -> ParseCodeResult:
    """Decode a share code.

    Rejects codes without the prefix, payloads that do not decompress to
    JSON, malformed payloads and payloads from a newer version.
    """
    settings = settings or get_settings().share
    if not isinstance(code, str) or not code.strip().startswith(settings.code_prefix):
        return ParseCodeResult(success=False, error=INVALID_FORMAT)

    encoded = code.strip()[len(settings.code_prefix) :]
    try:
        text = _lz.decompressFromBase64(_from_url_safe(encoded)) if encoded else None
    except Exception as exc:
        # the decoder raises assorted errors on corrupt input
        logger.warning("Share code decompression failed", error=repr(exc))
        text = None
    if not text:
        return ParseCodeResult(success=False, error=DECOMPRESS_FAILED)

    try:
        payload = json.loads(text)
    except ValueError:
        return ParseCodeResult(success=False, error=DECOMPRESS_FAILED)
    if not isinstance(payload, dict) or "data" not in payload:
        return ParseCodeResult(success=False, error=INVALID_STRUCTURE)
    try:
        shareable = ShareableData.model_validate(payload)
    except PydanticValidationError:
        return ParseCodeResult(success=False, error=INVALID_STRUCTURE)

    if shareable.version > settings.current_version:
        return ParseCodeResult(success=False, error=NEWER_VERSION)
    return ParseCodeResult(success=True, data=shareable)


def estimate_code_size(data: Any, *, settings: ShareSettings | None = None) -> int:
    """Length of the code ``data`` would produce (0 if it cannot be encoded)."""
    settings = settings or get_settings().share
    try:
        encoded = _lz.compressToBase64(_serialize(data))
    except (TypeError, ValueError):
        return 0
    return len(settings.code_prefix) + len(encoded)


def is_valid_share_code_format(code: str, *, settings: ShareSettings | None = None) -> bool:
    """Cheap plausibility check: prefix plus a long enough payload."""
    settings = settings or get_settings().share
    return (
        isinstance(code, str)
        and code.startswith(settings.code_prefix)
        and len(code) > len(settings.code_prefix) + settings.min_payload_length
    )


__all__ = [
    "ShareableData",
    "ShareCodeResult",
    "ParseCodeResult",
    "generate_share_code",
    "parse_share_code",
    "estimate_code_size",
    "is_valid_share_code_format",
]
