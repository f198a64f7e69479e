"""Domain layer errors.

Every domain error carries an ``ErrorKind`` so the interface layer can map it
to a transport status without inspecting messages.
"""

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Kinds of failure the core reports to its callers."""

    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    CONFLICT = "CONFLICT"


class ErrorResult(BaseModel):
    """Structured error returned across the core boundary."""

    kind: ErrorKind
    message: str


class DomainError(Exception):
    """Base domain error."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_result(self) -> ErrorResult:
        return ErrorResult(kind=self.kind, message=self.message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when a user attempts an action they are not allowed to take."""

    kind = ErrorKind.FORBIDDEN


class InvalidArgumentError(DomainError):
    """Raised for bad polarities, enum values or operations on invalid state."""

    kind = ErrorKind.INVALID_ARGUMENT


class ServiceUnavailableError(DomainError):
    """Raised when the storage collaborator cannot be reached."""

    kind = ErrorKind.SERVICE_UNAVAILABLE

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Service temporarily unavailable: {operation}")


class ConflictError(DomainError):
    """Raised when concurrent writers keep winning a race we cannot resolve."""

    kind = ErrorKind.CONFLICT
