"""
Capability Registry for MCP tools and resources.

This module provides the registry that maps tool names and resource URIs to
capability instances, and invokes them on behalf of the host.
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional, Set, Type

from mcp import types

from mcp_extension.core.container import ServiceContainer
from mcp_extension.mcp.capabilities.base import (
    Capability,
    CapabilityMetadata,
    ResourceCapability,
    ToolCapability,
)
from mcp_extension.mcp.structured import ResourceRecord
from mcp_extension.utils.errors import (
    CapabilityError,
    CapabilityNotFoundError,
    ConfigurationError,
)
from mcp_extension.utils.logging import setup_logging

logger = setup_logging(__name__)


class CapabilityRegistry:
    """Registry of the tools and resources an extension exposes.

    Built once at startup by the composition root; after that it is only
    read, so concurrent host requests need no locking.
    """

    def __init__(self, container: Optional[ServiceContainer] = None, namespace: Optional[str] = None):
        """Initialize the capability registry.

        Args:
            container: Service container used to build capability classes
            namespace: When set, tool names must start with ``{namespace}-``
                and resource URIs must use the ``{namespace}`` scheme
        """
        self.container = container
        self.namespace = namespace
        self._tools: Dict[str, ToolCapability] = {}
        self._resources: Dict[str, ResourceCapability] = {}
        self._tags: Dict[str, Set[str]] = defaultdict(set)
        self._metadata: Dict[str, CapabilityMetadata] = {}

        logger.info("Capability registry initialized")

    def register_class(self, capability_class: Type[Capability]) -> Capability:
        """Instantiate a capability class through the container and register it.

        Args:
            capability_class: Tool or resource class to build

        Returns:
            The registered instance

        Raises:
            ConfigurationError: If the class cannot be wired or fails validation
        """
        if self.container is not None:
            instance = self.container.create_instance(capability_class)
        else:
            try:
                instance = capability_class()
            except TypeError as e:
                raise ConfigurationError(
                    f"{capability_class.__name__} needs constructor dependencies but the registry has no container"
                ) from e

        self.register_instance(instance)
        return instance

    def register_instance(self, capability: Capability) -> None:
        """Register a capability instance directly.

        Args:
            capability: Tool or resource instance to register

        Raises:
            ConfigurationError: If the capability is invalid, outside the
                namespace, or its name/URI is already taken
        """
        if not isinstance(capability, (ToolCapability, ResourceCapability)):
            raise ConfigurationError(f"{capability!r} is neither a tool nor a resource")

        if not capability.validate():
            raise ConfigurationError(
                f"{capability.kind.capitalize()} {capability.__class__.__name__} failed validation",
                suggestions=capability.get_validation_errors(),
            )

        self._check_namespace(capability)

        key = capability.key
        target = self._tools if isinstance(capability, ToolCapability) else self._resources
        if key in target:
            raise ConfigurationError(
                f"{capability.kind.capitalize()} '{key}' is already registered by {target[key].__class__.__name__}",
                context={"key": key},
            )

        target[key] = capability
        self._metadata[key] = capability.metadata
        for tag in capability.metadata.tags or []:
            self._tags[tag].add(key)

        capability.on_load()
        logger.info(f"Registered {capability.kind}: {key}")

    def _check_namespace(self, capability: Capability) -> None:
        if not self.namespace:
            return

        if isinstance(capability, ToolCapability):
            if not capability.name.startswith(f"{self.namespace}-"):
                raise ConfigurationError(
                    f"Tool '{capability.name}' must be prefixed with '{self.namespace}-'",
                    suggestions=[f"Rename it to '{self.namespace}-<action>'"],
                )
        elif capability.scheme != self.namespace:
            raise ConfigurationError(
                f"Resource '{capability.uri}' must use the '{self.namespace}://' scheme",
                suggestions=[f"Use a URI like '{self.namespace}://<path>'"],
            )

    def unregister(self, key: str) -> bool:
        """Unregister a tool (by name) or resource (by URI).

        Returns:
            True if something was removed
        """
        capability = self._tools.pop(key, None) or self._resources.pop(key, None)
        if capability is None:
            return False

        capability.on_unload()
        metadata = self._metadata.pop(key, None)
        for tag in (metadata.tags if metadata else None) or []:
            self._tags[tag].discard(key)

        logger.info(f"Unregistered {capability.kind}: {key}")
        return True

    def unregister_all(self) -> None:
        """Unregister every capability."""
        for key in list(self._tools) + list(self._resources):
            self.unregister(key)

    def get_tool(self, name: str) -> ToolCapability:
        """Get a tool by name.

        Raises:
            CapabilityNotFoundError: If no tool has this name
        """
        try:
            return self._tools[name]
        except KeyError:
            raise CapabilityNotFoundError(
                f"Tool '{name}' not found in registry",
                suggestions=[f"Available tools: {', '.join(sorted(self._tools)) or 'none'}"],
            ) from None

    def get_resource(self, uri: str) -> ResourceCapability:
        """Get a resource by URI.

        A trailing slash added by URL normalisation is ignored.

        Raises:
            CapabilityNotFoundError: If no resource has this URI
        """
        resource = self._resources.get(uri) or self._resources.get(uri.rstrip("/"))
        if resource is None:
            raise CapabilityNotFoundError(
                f"Resource '{uri}' not found in registry",
                suggestions=[f"Available resources: {', '.join(sorted(self._resources)) or 'none'}"],
            )
        return resource

    def list_tool_names(self) -> List[str]:
        return sorted(self._tools)

    def list_resource_uris(self) -> List[str]:
        return sorted(self._resources)

    def get_capabilities_by_tag(self, tag: str) -> List[Capability]:
        """Get all capabilities with a specific tag."""
        keys = sorted(self._tags.get(tag, set()))
        return [self._tools.get(key) or self._resources[key] for key in keys]

    def list_tools(self) -> List[types.Tool]:
        """Get MCP tool definitions for all registered tools, sorted by name."""
        return [self._tools[name].get_tool_definition() for name in self.list_tool_names()]

    def list_resources(self) -> List[types.Resource]:
        """Get MCP resource definitions for all registered resources, sorted by URI."""
        return [self._resources[uri].get_resource_definition() for uri in self.list_resource_uris()]

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """Invoke a tool and return its JSON string.

        Argument validation happens before the tool body runs. Failures raised
        by the tool or its collaborators propagate unchanged.

        Raises:
            CapabilityNotFoundError: If the tool is unknown
            ToolArgumentError: If arguments do not match the tool's parameters
            CapabilityError: If the tool returns something other than a string
        """
        tool = self.get_tool(name)
        bound = tool.bind_arguments(arguments)

        result = tool.execute(**bound)
        if not isinstance(result, str):
            raise CapabilityError(
                f"Tool '{name}' returned {type(result).__name__}, expected a JSON string",
                context={"tool": name},
            )

        logger.debug(f"Tool {name} executed successfully")
        return result

    def read_resource(self, uri: str) -> ResourceRecord:
        """Read a resource and return its record.

        Raises:
            CapabilityNotFoundError: If the resource is unknown
            CapabilityError: If the record does not match the declared URI or MIME type
        """
        resource = self.get_resource(uri)
        record = resource.read()

        if not isinstance(record, ResourceRecord):
            raise CapabilityError(
                f"Resource '{resource.uri}' returned {type(record).__name__}, expected a ResourceRecord"
            )
        if record.uri != resource.uri or record.mimeType != resource.mime_type:
            raise CapabilityError(
                f"Resource '{resource.uri}' returned a record for {record.uri} ({record.mimeType}), "
                f"declared {resource.uri} ({resource.mime_type})",
                context={"uri": resource.uri},
            )

        logger.debug(f"Resource {resource.uri} read successfully")
        return record

    def execute_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> List[types.TextContent]:
        """Invoke a tool and wrap its JSON string for the MCP transport."""
        return [types.TextContent(type="text", text=self.call_tool(name, arguments))]

    def get_metadata(self, key: str) -> Optional[CapabilityMetadata]:
        """Get metadata for a tool name or resource URI."""
        return self._metadata.get(key)

    def get_registry_info(self) -> Dict[str, Any]:
        """Get information about the registry.

        Returns:
            Dictionary with registry statistics and information
        """
        return {
            "namespace": self.namespace,
            "total_tools": len(self._tools),
            "total_resources": len(self._resources),
            "tools": self.list_tool_names(),
            "resources": self.list_resource_uris(),
            "tags": {tag: sorted(keys) for tag, keys in self._tags.items() if keys},
        }

    def __len__(self) -> int:
        return len(self._tools) + len(self._resources)
