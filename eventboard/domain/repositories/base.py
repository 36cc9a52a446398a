"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import Any, List, Mapping, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def list(self) -> List[T]:
        """List entities, newest first."""
        ...

    def create(self, entity: T) -> T:
        """Persist a new entity and return it with its generated fields."""
        ...

    def update(self, id: int, changes: Mapping[str, Any]) -> Optional[T]:
        """Apply `changes` to an existing entity. None when it does not exist."""
        ...

    def delete(self, id: int) -> bool:
        """Delete an entity by ID. False when nothing was deleted."""
        ...
