"""
Capability system for MCP tools and resources.

Capabilities are plain classes deriving from ``ToolCapability`` or
``ResourceCapability``. ``CapabilityDiscovery`` finds them and
``CapabilityRegistry`` maps tool names and resource URIs to instances.
"""

from .base import Capability, CapabilityMetadata, ResourceCapability, ToolCapability
from .discovery import CapabilityDiscovery
from .registry import CapabilityRegistry

__all__ = [
    "Capability",
    "CapabilityDiscovery",
    "CapabilityMetadata",
    "CapabilityRegistry",
    "ResourceCapability",
    "ToolCapability",
]
