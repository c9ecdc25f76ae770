class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is missing."""


class AuthorizationError(DomainError):
    """Raised when the admin credential does not match."""


class NotFoundError(DomainError):
    """Raised when a referenced student does not exist."""


class UpstreamError(DomainError):
    """Raised when the record store or blob store rejects a call.

    The message is the upstream's own message and is returned to the caller.
    """


class BlobUploadError(UpstreamError):
    """Raised when an object could not be written to the blob store."""


class QrUploadFailed(UpstreamError):
    """Fatal: the generated QR image could not be stored."""


class DuplicateAttendanceError(DomainError):
    """Raised by the store when the (student, course, lecturer, day) key already exists."""


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__("Missing required configuration: " + ", ".join(self.missing))
