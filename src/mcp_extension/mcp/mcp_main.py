#!/usr/bin/env python3
"""
MCP Server entry point with proper stdio handling.

Configures logging to stderr before anything else so stdout stays reserved
for the MCP protocol, then runs the server with the configured manifest.
"""

import asyncio

from mcp_extension.utils.config import get_settings
from mcp_extension.utils.logging import configure_root_logging


def setup_mcp_logging() -> None:
    """Setup logging for the MCP server from settings."""
    settings = get_settings()
    configure_root_logging(
        level=settings.log_level,
        structured=settings.log_structured,
        log_file=settings.get_log_file_path(),
    )


async def main() -> None:
    """Main entry point for the MCP server."""
    setup_mcp_logging()

    # Import after logging is configured
    from mcp_extension.mcp.server import run_mcp_server

    await run_mcp_server(get_settings())


def main_sync() -> None:
    """Synchronous entry point for scripts."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
