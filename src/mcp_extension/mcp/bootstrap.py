"""
Composition root for the MCP extension.

``bootstrap_extension`` is called once at process start. It reads the
discovery manifest, loads service configuration into the container,
discovers capability classes and registers them. Everything it builds is
returned in an ``ExtensionRuntime`` that the caller owns and disposes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mcp_extension.core.container import ServiceContainer
from mcp_extension.core.interfaces import IEntityRepository
from mcp_extension.core.manifest import DiscoveryManifest
from mcp_extension.core.service_loader import load_includes
from mcp_extension.mcp.capabilities.discovery import CapabilityDiscovery
from mcp_extension.mcp.capabilities.registry import CapabilityRegistry
from mcp_extension.services.entities import StaticEntityRepository
from mcp_extension.utils.config import ExtensionSettings, get_settings
from mcp_extension.utils.errors import ConfigurationError
from mcp_extension.utils.logging import setup_logging

logger = setup_logging(__name__)


@dataclass
class ExtensionRuntime:
    """Everything built at startup; used as a context manager."""

    settings: ExtensionSettings
    manifest: DiscoveryManifest
    container: ServiceContainer
    registry: CapabilityRegistry
    discovery_stats: dict[str, Any] = field(default_factory=dict)

    def close(self) -> None:
        self.registry.unregister_all()
        self.container.dispose()

    def __enter__(self) -> "ExtensionRuntime":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def register_default_services(container: ServiceContainer) -> None:
    """Register the services the example capabilities need; includes may override them."""
    container.register(IEntityRepository, StaticEntityRepository)


def bootstrap_extension(
    settings: ExtensionSettings | None = None,
    manifest_path: Path | None = None,
) -> ExtensionRuntime:
    """Build the container and capability registry.

    Args:
        settings: Settings to use (defaults to the process-wide settings)
        manifest_path: Manifest to read; when omitted the configured manifest is
            used if it exists, otherwise the built-in capabilities are registered

    Returns:
        The runtime holding the container and registry

    Raises:
        ConfigurationError: If the manifest, service configuration or any
            capability is misconfigured
    """
    settings = settings or get_settings()

    if manifest_path is not None:
        manifest_path = Path(manifest_path).expanduser().resolve()
        if not manifest_path.is_file():
            raise ConfigurationError(f"Manifest not found: {manifest_path}", context={"path": str(manifest_path)})
        manifest = DiscoveryManifest.load(manifest_path)
    elif settings.get_manifest_path().is_file():
        manifest = DiscoveryManifest.load(settings.get_manifest_path())
    else:
        logger.warning(f"No manifest at {settings.get_manifest_path()}; using built-in capabilities")
        manifest = DiscoveryManifest.empty()

    container = ServiceContainer(settings)
    try:
        register_default_services(container)
        load_includes(container, manifest.includes)
        container.warm_up()

        registry = CapabilityRegistry(container, namespace=settings.namespace)
        container.register_instance(CapabilityRegistry, registry)

        discovery = CapabilityDiscovery(registry)
        stats = discovery.auto_discover(
            search_directories=manifest.scan_dirs,
            search_packages=manifest.packages,
            include_builtin=manifest.source is None,
        )
    except Exception:
        container.dispose()
        raise

    logger.info(
        f"Extension '{settings.extension_name}' ready: "
        f"{len(registry.list_tool_names())} tool(s), {len(registry.list_resource_uris())} resource(s)"
    )
    return ExtensionRuntime(
        settings=settings,
        manifest=manifest,
        container=container,
        registry=registry,
        discovery_stats=stats,
    )
