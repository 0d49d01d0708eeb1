"""
Readme resource: plain-text usage notes.
"""

from mcp_extension.mcp.capabilities.base import ResourceCapability
from mcp_extension.mcp.structured import TEXT_MIME_TYPE, ResourceRecord

README_TEXT = """\
Example MCP extension

Tools
  example-list-entities    List all entities and their fields.
  example-describe-entity  Describe one entity. Arguments: {"entity_id": "<id>"}

Resources
  example://config         Extension identity and registered capabilities (JSON).
  example://readme         This text.

Every tool returns a single JSON document.
"""


class ReadmeResource(ResourceCapability):
    """``example://readme``: fixed usage notes, returned unmodified."""

    @property
    def uri(self) -> str:
        return "example://readme"

    @property
    def name(self) -> str:
        return "example-readme"

    @property
    def description(self) -> str:
        return "Usage notes for the example tools and resources"

    @property
    def mime_type(self) -> str:
        return TEXT_MIME_TYPE

    def read(self) -> ResourceRecord:
        return self.build_record(README_TEXT)
