"""
Static entity repository.

An in-memory stand-in for whatever data source a real extension wraps
(a database, an ORM's metadata, a remote API). It is the collaborator the
example tools receive through the service container.
"""

from typing import Any

from mcp_extension.core.interfaces import IEntityRepository
from mcp_extension.mcp.structured.models import EntityItem
from mcp_extension.utils.errors import ConfigurationError, EntityNotFoundError
from mcp_extension.utils.logging import LoggerMixin

DEFAULT_ENTITIES: list[dict[str, Any]] = [
    {
        "id": "order",
        "name": "Order",
        "description": "A customer purchase with one or more line items",
        "fields": ["id", "customer_id", "status", "total", "created_at"],
    },
    {
        "id": "product",
        "name": "Product",
        "description": "An item that can be ordered",
        "fields": ["id", "sku", "title", "price"],
    },
    {
        "id": "user",
        "name": "User",
        "description": "A registered account",
        "fields": ["id", "email", "display_name", "created_at"],
    },
]


class StaticEntityRepository(IEntityRepository, LoggerMixin):
    """Entity repository backed by a fixed list.

    Entities are returned sorted by id so repeated calls give identical output.
    """

    def __init__(self, entities: list[dict[str, Any]] | None = None):
        """Initialize the repository.

        Args:
            entities: Entity definitions (defaults to the bundled fixtures);
                usually passed as ``arguments`` in the service configuration

        Raises:
            ConfigurationError: If a definition is malformed or an id repeats
        """
        items: dict[str, EntityItem] = {}
        for raw in entities if entities is not None else DEFAULT_ENTITIES:
            try:
                item = EntityItem.model_validate(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid entity definition {raw!r}: {e}") from e
            if item.id in items:
                raise ConfigurationError(f"Duplicate entity id '{item.id}'")
            items[item.id] = item

        self._entities = dict(sorted(items.items()))
        self.logger.debug(f"Loaded {len(self._entities)} entities")

    def list_entities(self) -> list[EntityItem]:
        return list(self._entities.values())

    def get_entity(self, entity_id: str) -> EntityItem:
        try:
            return self._entities[entity_id]
        except KeyError:
            raise EntityNotFoundError(
                f"Entity '{entity_id}' not found",
                suggestions=[f"Known entities: {', '.join(self._entities)}"],
                context={"entity_id": entity_id},
            ) from None
