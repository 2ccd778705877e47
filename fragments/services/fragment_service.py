"""Fragment service: the caller-side flows over entities, storage and conversion."""

from typing import Optional, Union

from common.logging_config import get_logger
from fragments import conversion_matrix
from fragments.conversion_engine import ConversionEngine
from fragments.exceptions import (
    FragmentsException,
    NotFoundError,
    StorageError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from fragments.models.fragment import Fragment
from fragments.schemas.common import ErrorResponse
from fragments.schemas.fragments import (
    ExpandedFragmentListResponse,
    FragmentListResponse,
    FragmentResponse,
)
from fragments.storage.backend import StorageBackend
from fragments.types import Representation
from fragments.utils import split_extension

logger = get_logger(__name__)

ERROR_CODES = {
    ValidationError: "VALIDATION_ERROR",
    NotFoundError: "NOT_FOUND",
    UnsupportedMediaTypeError: "UNSUPPORTED_MEDIA_TYPE",
    StorageError: "STORAGE_ERROR",
}


class FragmentService:
    def __init__(self, backend: StorageBackend, engine: Optional[ConversionEngine] = None):
        self.backend = backend
        self.engine = engine or ConversionEngine()

    def create_fragment(self, owner_id: str, content_type: str, data: bytes) -> FragmentResponse:
        """
        Store a new fragment.

        Args:
            owner_id: Authenticated owner
            content_type: Content-Type of the payload, parameters allowed
            data: Raw payload

        Returns:
            Metadata of the stored fragment

        Raises:
            ValidationError: Unsupported type or non-bytes payload
            StorageError: Backend failure
        """
        if not isinstance(data, (bytes, bytearray)):
            raise ValidationError("Fragment data must be bytes")

        fragment = Fragment(self.backend, owner_id=owner_id, type=content_type)
        fragment.save()
        fragment.set_data(data)

        logger.info(f"Fragment created [id={fragment.id}] [type={fragment.type}] [size={fragment.size}]")
        return fragment.to_response()

    def list_fragments(
        self, owner_id: str, expand: bool = False
    ) -> Union[FragmentListResponse, ExpandedFragmentListResponse]:
        fragments = Fragment.by_user(self.backend, owner_id, expand)
        logger.debug(f"Listed {len(fragments)} fragment(s) [expand={expand}]")

        if expand:
            return ExpandedFragmentListResponse(fragments=[f.to_response() for f in fragments])
        return FragmentListResponse(fragments=fragments)

    def get_fragment_info(self, owner_id: str, fragment_id: str) -> FragmentResponse:
        return Fragment.by_id(self.backend, owner_id, fragment_id).to_response()

    def get_fragment_data(self, owner_id: str, id_with_extension: str) -> Representation:
        """
        Read a fragment as stored, or converted when an extension is given.

        Args:
            owner_id: Authenticated owner
            id_with_extension: Fragment id, optionally suffixed (e.g., "abc" or "abc.html")

        Returns:
            Representation of (bytes, media type). Without an extension the media
            type is the stored full type, parameters included.

        Raises:
            NotFoundError: Unknown id or missing payload
            UnsupportedMediaTypeError: Extension not reachable from the fragment's type
        """
        fragment_id, extension = split_extension(id_with_extension)
        fragment = Fragment.by_id(self.backend, owner_id, fragment_id)

        if not extension:
            return Representation(fragment.get_data(), fragment.type)

        return self.engine.convert(fragment, extension)

    def update_fragment(
        self, owner_id: str, fragment_id: str, content_type: str, data: bytes
    ) -> FragmentResponse:
        """
        Replace a fragment's payload. The base type cannot change.

        Raises:
            NotFoundError: Unknown id
            ValidationError: Different base type or non-bytes payload
        """
        fragment = Fragment.by_id(self.backend, owner_id, fragment_id)

        if conversion_matrix.base_type(content_type) != fragment.mime_type:
            logger.warning(
                f"Rejected type change [id={fragment_id}] [{fragment.mime_type} -> {content_type}]"
            )
            raise ValidationError(
                f"Fragment type cannot change from {fragment.mime_type} to {content_type}"
            )

        fragment.set_data(data)
        logger.info(f"Fragment updated [id={fragment.id}] [size={fragment.size}]")
        return fragment.to_response()

    def delete_fragment(self, owner_id: str, fragment_id: str) -> None:
        Fragment.delete(self.backend, owner_id, fragment_id)

    @staticmethod
    def error_response(error: FragmentsException) -> ErrorResponse:
        """Describe an error for the response layer."""
        for error_type, code in ERROR_CODES.items():
            if isinstance(error, error_type):
                return ErrorResponse(detail=str(error), code=code)
        return ErrorResponse(detail=str(error), code="INTERNAL_ERROR")
