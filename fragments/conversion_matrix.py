"""
Static content-type conversion table.

Maps each supported base media type to the ordered list of media types a
fragment of that type can be served as, and maps requested file extensions
to media types. Every lookup here is pure: no I/O, no state.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple


class ConversionKind(str, Enum):
    """How a payload is transformed between two media types."""
    IDENTITY = "identity"
    RENDER = "render"
    REENCODE = "reencode"


TEXT_PLAIN = "text/plain"
TEXT_MARKDOWN = "text/markdown"
TEXT_HTML = "text/html"
APPLICATION_JSON = "application/json"
IMAGE_PNG = "image/png"
IMAGE_JPEG = "image/jpeg"
IMAGE_WEBP = "image/webp"
IMAGE_GIF = "image/gif"

SUPPORTED_TYPES: Tuple[str, ...] = (
    TEXT_PLAIN,
    TEXT_MARKDOWN,
    TEXT_HTML,
    APPLICATION_JSON,
    IMAGE_PNG,
    IMAGE_JPEG,
    IMAGE_WEBP,
    IMAGE_GIF,
)

IMAGE_TYPES: Tuple[str, ...] = (IMAGE_PNG, IMAGE_JPEG, IMAGE_WEBP, IMAGE_GIF)

# Source type first in every list
FORMATS: Dict[str, List[str]] = {
    TEXT_PLAIN: [TEXT_PLAIN],
    TEXT_MARKDOWN: [TEXT_MARKDOWN, TEXT_HTML, TEXT_PLAIN],
    TEXT_HTML: [TEXT_HTML, TEXT_PLAIN],
    APPLICATION_JSON: [APPLICATION_JSON, TEXT_PLAIN],
    **{image_type: list(IMAGE_TYPES) for image_type in IMAGE_TYPES},
}

EXTENSIONS: Dict[str, str] = {
    ".txt": TEXT_PLAIN,
    ".md": TEXT_MARKDOWN,
    ".html": TEXT_HTML,
    ".json": APPLICATION_JSON,
    ".png": IMAGE_PNG,
    ".jpg": IMAGE_JPEG,
    ".jpeg": IMAGE_JPEG,
    ".webp": IMAGE_WEBP,
    ".gif": IMAGE_GIF,
}

# Pillow format names
IMAGE_FORMATS: Dict[str, str] = {
    IMAGE_PNG: "PNG",
    IMAGE_JPEG: "JPEG",
    IMAGE_WEBP: "WEBP",
    IMAGE_GIF: "GIF",
}

CONVERSIONS: Dict[Tuple[str, str], ConversionKind] = {
    (TEXT_PLAIN, TEXT_PLAIN): ConversionKind.IDENTITY,
    (TEXT_MARKDOWN, TEXT_MARKDOWN): ConversionKind.IDENTITY,
    (TEXT_MARKDOWN, TEXT_HTML): ConversionKind.RENDER,
    (TEXT_MARKDOWN, TEXT_PLAIN): ConversionKind.IDENTITY,
    (TEXT_HTML, TEXT_HTML): ConversionKind.IDENTITY,
    (TEXT_HTML, TEXT_PLAIN): ConversionKind.IDENTITY,
    (APPLICATION_JSON, APPLICATION_JSON): ConversionKind.IDENTITY,
    (APPLICATION_JSON, TEXT_PLAIN): ConversionKind.IDENTITY,
    **{
        (source, target): ConversionKind.REENCODE
        for source in IMAGE_TYPES
        for target in IMAGE_TYPES
    },
}


def base_type(content_type: str) -> str:
    """
    Strip parameters from a content-type string.

    Args:
        content_type: Full content type (e.g., "text/html; charset=utf-8")

    Returns:
        Lower-cased media type without parameters (e.g., "text/html")
    """
    return content_type.split(";", 1)[0].strip().lower()


def is_supported_type(content_type: str) -> bool:
    return base_type(content_type) in SUPPORTED_TYPES


def formats_for(media_type: str) -> List[str]:
    """Ordered media types reachable from ``media_type``; empty if unsupported."""
    return list(FORMATS.get(media_type, []))


def valid_extensions_for(media_type: str) -> List[str]:
    """
    Extensions a representation of ``media_type`` may be requested with.

    Ordered by the reachable formats, then by extension table order.
    """
    return [
        extension
        for target in FORMATS.get(media_type, [])
        for extension, mime in EXTENSIONS.items()
        if mime == target
    ]


def mime_for_extension(extension: str) -> Optional[str]:
    return EXTENSIONS.get(extension)


def conversion_kind(source: str, target: str) -> Optional[ConversionKind]:
    """
    Resolve how to turn ``source`` into ``target``.

    Returns:
        ConversionKind for a legal pair, None when no conversion path exists
    """
    if target not in FORMATS.get(source, []):
        return None
    return CONVERSIONS.get((source, target))
