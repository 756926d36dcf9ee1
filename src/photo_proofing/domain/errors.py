"""Domain errors surfaced to the API layer."""


class ProofingError(Exception):
    """Base class for expected, user-facing failures."""

    message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidRequestError(ProofingError):
    """The request is malformed or references data it cannot use."""

    message = "Invalid request data"

    def __init__(self, message: str | None = None, details: object = None) -> None:
        super().__init__(message)
        self.details = details


class UploadRejectedError(InvalidRequestError):
    """An uploaded file failed validation."""

    message = "Invalid upload"


class AuthenticationError(ProofingError):
    """No valid photographer session was presented."""

    message = "Unauthorized"


class PermissionDeniedError(ProofingError):
    """The photographer does not own the requested resource."""

    message = "Forbidden"


class NotFoundError(ProofingError):
    """A requested record does not exist."""

    message = "Not found"


class GalleryNotFoundError(NotFoundError):
    """No active gallery matches the identifier or access code."""

    message = "Gallery not found"


class GalleryExpiredError(ProofingError):
    """The gallery exists but its expiration time has passed."""

    message = "Gallery has expired"


class CheckoutError(ProofingError):
    """Creating the order or its payment session failed."""

    message = "Internal server error"
