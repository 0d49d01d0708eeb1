"""
Service interfaces for dependency injection and modularity.

Capability objects depend on these abstract classes, never on concrete
services, so the service configuration can swap implementations.
"""

from abc import ABC, abstractmethod

from mcp_extension.mcp.structured.models import EntityItem


class IEntityRepository(ABC):
    """Abstract interface for the domain entities an extension exposes."""

    @abstractmethod
    def list_entities(self) -> list[EntityItem]:
        """Return all entities in a stable order."""
        pass

    @abstractmethod
    def get_entity(self, entity_id: str) -> EntityItem:
        """Return one entity.

        Raises:
            EntityNotFoundError: If no entity has this id
        """
        pass
