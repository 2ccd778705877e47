"""Custom exception classes for the fragments engine."""


class FragmentsException(Exception):
    """
    Base exception class for all fragment-related errors.
    """
    pass


class ValidationError(FragmentsException):
    """
    Raised when fragment construction input or a payload is malformed.
    """
    pass


class NotFoundError(FragmentsException):
    """
    Raised when fragment metadata or payload is absent for an owner and id.
    """
    pass


class UnsupportedMediaTypeError(FragmentsException):
    """
    Raised when a representation cannot be produced for a fragment.
    """
    pass


class StorageError(FragmentsException):
    """
    Raised when the storage backend fails to read or write.
    """
    pass
