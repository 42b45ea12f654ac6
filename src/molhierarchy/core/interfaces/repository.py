"""Abstract base class for read-only repositories following the Repository Pattern."""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Generic repository interface for loading entities by ID.

    Structures are only ever read, so the contract stops at lookup.
    """

    @abstractmethod
    def get(self, id: str) -> Optional[T]:
        """Retrieve an entity by ID, or None if it does not exist."""
        pass

    @abstractmethod
    def list(self) -> List[str]:
        """List the IDs of all available entities."""
        pass
