"""
Extension configuration resource.

Publishes the extension's identity and the names of everything it registered,
so a host can inspect what the extension offers without calling any tool.
"""

from mcp_extension.mcp.capabilities.base import ResourceCapability
from mcp_extension.mcp.capabilities.registry import CapabilityRegistry
from mcp_extension.mcp.structured import JSON_MIME_TYPE, ResourceRecord, extension_config_to_json
from mcp_extension.utils.config import ExtensionSettings


class ExampleConfigResource(ResourceCapability):
    """``example://config``: extension name, version, namespace, tools and resources."""

    def __init__(self, settings: ExtensionSettings, registry: CapabilityRegistry):
        self.settings = settings
        self.registry = registry

    @property
    def uri(self) -> str:
        return "example://config"

    @property
    def name(self) -> str:
        return "example-config"

    @property
    def description(self) -> str:
        return "Extension identity and the tools and resources it registers"

    @property
    def mime_type(self) -> str:
        return JSON_MIME_TYPE

    @property
    def tags(self) -> list[str]:
        return ["example", "config"]

    def read(self) -> ResourceRecord:
        return self.build_json_record(
            extension_config_to_json(
                name=self.settings.extension_name,
                version=self.settings.extension_version,
                namespace=self.settings.namespace,
                tools=self.registry.list_tool_names(),
                resources=self.registry.list_resource_uris(),
            )
        )
