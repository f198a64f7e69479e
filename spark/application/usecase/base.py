"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """Use case that owns its transaction boundary.

    Subclasses commit through the unit of work themselves, so side effects
    that must only follow a durable write (realtime broadcasts) run after
    ``execute`` has committed.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
