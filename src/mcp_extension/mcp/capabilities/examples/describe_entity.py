"""
Describe Entity tool.

Returns one entity by id. An unknown id is reported by the repository as
``EntityNotFoundError`` and is not turned into a result.
"""

from pydantic import BaseModel, ConfigDict, Field

from mcp_extension.core.interfaces import IEntityRepository
from mcp_extension.mcp.capabilities.base import ToolCapability
from mcp_extension.mcp.structured import entity_detail_to_json


class DescribeEntityInput(BaseModel):
    entity_id: str = Field(min_length=1, description="Id of the entity to describe, e.g. 'user'")

    model_config = ConfigDict(extra="forbid")


class DescribeEntityTool(ToolCapability):
    """Tool returning ``{"entity": {...}}`` for a single entity."""

    input_model = DescribeEntityInput

    def __init__(self, entities: IEntityRepository):
        self.entities = entities

    @property
    def name(self) -> str:
        return "example-describe-entity"

    @property
    def description(self) -> str:
        return "Describe a single entity by id, including its fields"

    @property
    def tags(self) -> list[str]:
        return ["example", "entities"]

    def execute(self, entity_id: str) -> str:
        return self.to_json(entity_detail_to_json(self.entities.get_entity(entity_id)))
