"""External codecs: markdown rendering and raster image re-encoding."""

import io

from markdown_it import MarkdownIt
from PIL import Image, UnidentifiedImageError

from common.logging_config import get_logger
from fragments.conversion_matrix import IMAGE_FORMATS
from fragments.exceptions import UnsupportedMediaTypeError

logger = get_logger(__name__)

_markdown = MarkdownIt("js-default", {"html": True, "linkify": True, "typographer": True})

# Modes each encoder can write without conversion
_ENCODER_MODES = {
    "JPEG": {"RGB", "L", "CMYK"},
    "PNG": {"RGB", "RGBA", "L", "LA", "P", "1", "I", "I;16"},
    "WEBP": {"RGB", "RGBA"},
    "GIF": {"P", "L", "1", "RGB", "RGBA"},
}


def render_markdown(text: str) -> str:
    """
    Render markdown to HTML.

    The renderer's trailing newline is part of the output.

    Args:
        text: Markdown source

    Returns:
        HTML text
    """
    return _markdown.render(text)


def reencode_image(data: bytes, source_type: str, target_type: str) -> bytes:
    """
    Decode a raster image and encode it into another format.

    Args:
        data: Encoded image bytes
        source_type: Media type the bytes were stored as (e.g., "image/png")
        target_type: Media type to produce (e.g., "image/webp")

    Returns:
        Encoded image bytes in the target format

    Raises:
        UnsupportedMediaTypeError: If either type is not a raster type or the bytes cannot be decoded
    """
    if source_type not in IMAGE_FORMATS or target_type not in IMAGE_FORMATS:
        raise UnsupportedMediaTypeError(f"Cannot re-encode {source_type} as {target_type}")

    target_format = IMAGE_FORMATS[target_type]

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            img = _prepare_mode(img, target_format)

            buffer = io.BytesIO()
            img.save(buffer, format=target_format)
            return buffer.getvalue()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
        EOFError,
        SyntaxError,
    ) as e:
        logger.warning(f"Image re-encode failed [{source_type} -> {target_type}]: {e}")
        raise UnsupportedMediaTypeError(f"Payload is not a decodable {source_type} image") from e


def _prepare_mode(img: Image.Image, target_format: str) -> Image.Image:
    if img.mode in _ENCODER_MODES[target_format]:
        return img

    if target_format == "JPEG":
        if "A" not in img.getbands() and img.mode != "P":
            return img.convert("RGB")
        # JPEG has no alpha channel, flatten onto white
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[3])
        return background

    if target_format == "WEBP":
        return img.convert("RGBA" if "A" in img.getbands() or "transparency" in img.info else "RGB")

    return img.convert("RGB")
