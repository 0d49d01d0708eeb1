"""
List Entities tool.

Lists every entity known to the injected entity repository.
"""

from mcp_extension.core.interfaces import IEntityRepository
from mcp_extension.mcp.capabilities.base import ToolCapability
from mcp_extension.mcp.structured import entity_list_to_json
from mcp_extension.utils.logging import setup_logging

logger = setup_logging(__name__)


class ListEntitiesTool(ToolCapability):
    """Tool returning ``{"entities": [...], "count": N}``."""

    def __init__(self, entities: IEntityRepository):
        self.entities = entities

    @property
    def name(self) -> str:
        return "example-list-entities"

    @property
    def description(self) -> str:
        return "List all entities known to the extension, with their fields"

    @property
    def tags(self) -> list[str]:
        return ["example", "entities"]

    def execute(self) -> str:
        items = self.entities.list_entities()
        logger.debug(f"Listing {len(items)} entities")
        return self.to_json(entity_list_to_json(items))
