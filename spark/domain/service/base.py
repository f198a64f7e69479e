"""Base service class for domain services."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError

from spark.domain.error import ServiceUnavailableError

# Failures that mean storage is unreachable, not that the request was wrong.
STORAGE_UNAVAILABLE_ERRORS = (
    OperationalError,
    InterfaceError,
    ConnectionError,
    TimeoutError,
)


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    @contextmanager
    def storage_guard(self, operation: str) -> Iterator[None]:
        """Translate storage connectivity failures into ServiceUnavailableError.

        Args:
            operation: Name of the operation, used in logs and the error message

        Raises:
            ServiceUnavailableError: If storage could not be reached
        """
        try:
            yield
        except STORAGE_UNAVAILABLE_ERRORS as e:
            logfire.error(
                "Storage unavailable", operation=operation, error=str(e)
            )
            raise ServiceUnavailableError(operation) from e
