"""
Example MCP capabilities.

These are the built-in tools and resources registered when no manifest is
present, and the scan target of the bundled ``mcp-extension.yaml``.
"""

from mcp_extension.mcp.capabilities.base import Capability

from .config_resource import ExampleConfigResource
from .describe_entity import DescribeEntityInput, DescribeEntityTool
from .list_entities import ListEntitiesTool
from .readme_resource import README_TEXT, ReadmeResource


def get_builtin_capabilities() -> list[type[Capability]]:
    """Get all built-in capability classes.

    Returns:
        List of built-in capability classes
    """
    return [
        ListEntitiesTool,
        DescribeEntityTool,
        ExampleConfigResource,
        ReadmeResource,
    ]


__all__ = [
    "get_builtin_capabilities",
    "DescribeEntityInput",
    "DescribeEntityTool",
    "ExampleConfigResource",
    "ListEntitiesTool",
    "README_TEXT",
    "ReadmeResource",
]
