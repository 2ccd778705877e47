"""Produce alternate representations of a fragment's payload."""

from typing import Callable

from common.logging_config import get_logger
from fragments import conversion_matrix
from fragments.codecs import reencode_image, render_markdown
from fragments.conversion_matrix import ConversionKind
from fragments.exceptions import UnsupportedMediaTypeError
from fragments.models.fragment import Fragment
from fragments.types import Representation

logger = get_logger(__name__)

MarkdownRenderer = Callable[[str], str]
ImageCodec = Callable[[bytes, str, str], bytes]


class ConversionEngine:
    """
    Converts fragment payloads using the conversion table.

    The engine only reads: it never writes the fragment or its storage.
    Codecs are injectable so callers and tests can substitute them.
    """

    def __init__(
        self,
        renderer: MarkdownRenderer = render_markdown,
        image_codec: ImageCodec = reencode_image,
    ):
        self.renderer = renderer
        self.image_codec = image_codec

    def convert(self, fragment: Fragment, extension: str) -> Representation:
        """
        Convert a fragment's payload to the format named by ``extension``.

        Args:
            fragment: Loaded fragment
            extension: Requested extension including the dot (e.g., ".html")

        Returns:
            Representation of (converted bytes, media type of the extension)

        Raises:
            UnsupportedMediaTypeError: If the extension is not reachable from the
                fragment's type or the payload cannot be decoded
            NotFoundError: If the fragment has no stored payload
        """
        source = fragment.mime_type
        target = conversion_matrix.mime_for_extension(extension)

        if target is None or target not in fragment.formats:
            logger.info(f"Unsupported conversion [id={fragment.id}] [{source} -> {extension!r}]")
            raise UnsupportedMediaTypeError(f"Cannot convert {source} to {extension!r}")

        kind = conversion_matrix.conversion_kind(source, target)
        if kind is None:
            raise UnsupportedMediaTypeError(f"No conversion from {source} to {target}")

        data = fragment.get_data()
        logger.debug(f"Converting fragment [id={fragment.id}] [{source} -> {target}] [kind={kind.value}]")

        if kind is ConversionKind.IDENTITY:
            converted = data
        elif kind is ConversionKind.RENDER:
            converted = self._render(data)
        else:
            converted = self.image_codec(data, source, target)

        return Representation(converted, target)

    def _render(self, data: bytes) -> bytes:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnsupportedMediaTypeError("Markdown payload is not valid UTF-8") from e
        return self.renderer(text).encode("utf-8")
