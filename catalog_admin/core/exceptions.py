"""
Error taxonomy shared by repositories, services and controllers.
"""
from typing import Optional


class AdminConsoleError(Exception):
    """Base class for every error raised by the console."""


class MalformedResponse(AdminConsoleError):
    """A list response did not match any tolerated envelope shape."""

    def __init__(self, resource: str, received: object = None) -> None:
        self.resource = resource
        self.received_type = type(received).__name__
        super().__init__(
            f"Received {resource} data is not a list in the expected format"
        )


class FieldError(AdminConsoleError):
    """The first validation rule a draft failed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldError):
            return NotImplemented
        return (self.field, self.message) == (other.field, other.message)

    def __hash__(self) -> int:
        return hash((self.field, self.message))

    def __repr__(self) -> str:
        return f"FieldError(field={self.field!r}, message={self.message!r})"


class TransportError(AdminConsoleError):
    """The request never produced an HTTP response."""


class BackendError(AdminConsoleError):
    """The backend answered with a non-success status code."""

    def __init__(self, status_code: int, detail: Optional[str] = None) -> None:
        self.status_code = status_code
        self.detail = detail or f"Backend responded with status {status_code}"
        super().__init__(self.detail)


class TokenMalformed(AdminConsoleError):
    """A bearer token failed the structural or decode checks."""


class InvalidTransition(AdminConsoleError):
    """A confirmation workflow operation was invoked in the wrong state."""
