"""
MCP server implementation for the extension.

This module exposes a capability registry to an MCP host through the SDK's
low-level ``Server``. Handlers only relay: exceptions raised by capabilities
propagate to the SDK, which reports them to the host as errors.
"""

import json

import mcp.server.stdio
from mcp import types
from mcp.server import NotificationOptions, Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from pydantic import AnyUrl

from mcp_extension.mcp.bootstrap import ExtensionRuntime, bootstrap_extension
from mcp_extension.mcp.capabilities.registry import CapabilityRegistry
from mcp_extension.utils.config import ExtensionSettings, get_settings
from mcp_extension.utils.logging import setup_logging

logger = setup_logging(__name__)


def create_mcp_server(registry: CapabilityRegistry, settings: ExtensionSettings | None = None) -> Server:
    """Create and configure the MCP server.

    Args:
        registry: Registry holding the extension's tools and resources
        settings: Optional settings override

    Returns:
        Configured MCP server instance
    """
    settings = settings or get_settings()
    server = Server(settings.mcp_server_name, version=settings.mcp_server_version)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """List available MCP tools from the capability registry."""
        tools = registry.list_tools()
        logger.debug(f"list_tools returning {len(tools)} tools")
        return tools

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
        """Handle tool execution requests via the capability registry."""
        logger.info(f"call_tool: name={name}")
        return registry.execute_tool(name, arguments or {})

    @server.list_resources()
    async def handle_list_resources() -> list[types.Resource]:
        """List available resources."""
        return registry.list_resources()

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        """Read a resource."""
        record = registry.read_resource(str(uri))
        logger.info(f"read_resource: uri={record.uri}")
        return [ReadResourceContents(content=record.text, mime_type=record.mimeType)]

    return server


def create_initialization_options(server: Server, settings: ExtensionSettings) -> InitializationOptions:
    return InitializationOptions(
        server_name=settings.mcp_server_name,
        server_version=settings.mcp_server_version,
        capabilities=server.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        ),
    )


async def serve_runtime(runtime: ExtensionRuntime) -> None:
    """Run an already bootstrapped extension over stdio until the host disconnects."""
    server = create_mcp_server(runtime.registry, runtime.settings)
    logger.info(f"Starting MCP server {json.dumps(runtime.registry.get_registry_info())}")

    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            create_initialization_options(server, runtime.settings),
        )

    logger.info("MCP server stopped")


async def run_mcp_server(settings: ExtensionSettings | None = None, manifest_path=None) -> None:
    """Bootstrap the extension and run the MCP server with stdio transport.

    Args:
        settings: Optional settings override
        manifest_path: Optional discovery manifest path
    """
    with bootstrap_extension(settings, manifest_path) as runtime:
        await serve_runtime(runtime)
