"""
Main entry point for the MCP extension CLI.

This module provides the command-line interface: running the stdio MCP
server, and listing, calling and reading capabilities without a host.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click

from mcp_extension.mcp.bootstrap import ExtensionRuntime, bootstrap_extension
from mcp_extension.mcp.structured import to_json
from mcp_extension.utils.config import get_settings
from mcp_extension.utils.errors import ExtensionError
from mcp_extension.utils.helpers import validate_settings_or_exit
from mcp_extension.utils.logging import configure_root_logging, setup_logging

logger = setup_logging(__name__)


def format_error(error: ExtensionError) -> str:
    """Render an extension error with its suggestions for the terminal."""
    lines = [f"[{error.error_code}] {error}"]
    lines.extend(f"  - {suggestion}" for suggestion in error.suggestions)
    return "\n".join(lines)


def get_runtime(ctx: click.Context) -> ExtensionRuntime:
    """Bootstrap the extension once per invocation; disposed when the command ends."""
    root = ctx.find_root()
    if 'runtime' not in root.obj:
        try:
            runtime = bootstrap_extension(root.obj['settings'], root.obj['manifest'])
        except ExtensionError as e:
            raise click.ClickException(format_error(e)) from e
        root.obj['runtime'] = root.with_resource(runtime)
    return root.obj['runtime']


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--manifest', type=click.Path(path_type=Path),
              help='Path to the discovery manifest (defaults to MCP_EXTENSION_MANIFEST_PATH)')
@click.pass_context
def cli(ctx: click.Context, verbose: bool, manifest: Optional[Path]) -> None:
    """MCP extension - tools and resources for MCP hosts."""
    settings = get_settings()

    configure_root_logging(
        level="DEBUG" if verbose else settings.log_level,
        structured=settings.log_structured,
        log_file=settings.get_log_file_path(),
    )

    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings
    ctx.obj['manifest'] = manifest
    ctx.obj['verbose'] = verbose

    if verbose:
        logger.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the MCP server on stdio."""
    validate_settings_or_exit(ctx.obj['settings'])
    runtime = get_runtime(ctx)

    from mcp_extension.mcp.server import serve_runtime

    asyncio.run(serve_runtime(runtime))


@cli.command('list')
@click.option('--json', 'as_json', is_flag=True, help='Print registry information as JSON')
@click.pass_context
def list_capabilities(ctx: click.Context, as_json: bool) -> None:
    """List registered tools and resources."""
    runtime = get_runtime(ctx)
    registry = runtime.registry

    if as_json:
        click.echo(to_json(registry.get_registry_info(), indent=runtime.settings.json_indent))
        return

    click.echo("Tools:")
    for tool in registry.list_tools():
        click.echo(f"  {tool.name:<28} {tool.description}")

    click.echo("Resources:")
    for resource in registry.list_resources():
        click.echo(f"  {str(resource.uri):<28} {resource.mimeType:<18} {resource.description}")


@cli.command()
@click.argument('name')
@click.option('--args', 'raw_arguments', default='{}', show_default=True,
              help='Tool arguments as a JSON object')
@click.pass_context
def call(ctx: click.Context, name: str, raw_arguments: str) -> None:
    """Invoke the tool NAME and print its JSON result."""
    try:
        arguments = json.loads(raw_arguments)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--args") from e
    if not isinstance(arguments, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--args")

    runtime = get_runtime(ctx)
    try:
        result = runtime.registry.call_tool(name, arguments)
    except ExtensionError as e:
        raise click.ClickException(format_error(e)) from e

    click.echo(result)


@cli.command()
@click.argument('uri')
@click.pass_context
def read(ctx: click.Context, uri: str) -> None:
    """Read the resource URI and print its record."""
    runtime = get_runtime(ctx)
    try:
        record = runtime.registry.read_resource(uri)
    except ExtensionError as e:
        raise click.ClickException(format_error(e)) from e

    click.echo(to_json(record.to_dict(), indent=runtime.settings.json_indent))


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate settings, manifest, services and capabilities."""
    validate_settings_or_exit(ctx.obj['settings'])

    runtime = get_runtime(ctx)
    info = runtime.registry.get_registry_info()

    source = runtime.manifest.source or "built-in capabilities"
    click.echo(f"Manifest: {source}")
    click.echo(f"Services: {runtime.container.get_service_info()['registered_services']}")
    click.echo(f"OK: {info['total_tools']} tool(s), {info['total_resources']} resource(s)")

    if ctx.obj['verbose']:
        logger.debug(f"Registry: {info}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
