"""
Service configuration loader.

Reads the ``includes`` files named by the discovery manifest and registers
their services into the container::

    services:
      mcp_extension.core.interfaces.IEntityRepository:
        class: mcp_extension.services.entities.StaticEntityRepository
        singleton: true
        arguments: {}

``class`` defaults to the interface itself and ``singleton`` to true.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mcp_extension.core.container import ServiceContainer
from mcp_extension.utils.errors import ConfigurationError
from mcp_extension.utils.helpers import import_string, load_yaml_mapping
from mcp_extension.utils.logging import setup_logging

logger = setup_logging(__name__)


class ServiceDefinition(BaseModel):
    class_path: str | None = Field(default=None, alias="class")
    singleton: bool = True
    arguments: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ServiceConfiguration(BaseModel):
    services: dict[str, ServiceDefinition | None] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


def load_service_configuration(path: Path) -> ServiceConfiguration:
    """Parse one service configuration file.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    data = load_yaml_mapping(path)
    try:
        return ServiceConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid service configuration {path}",
            suggestions=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
            context={"path": str(path)},
        ) from e


def register_services(container: ServiceContainer, configuration: ServiceConfiguration) -> int:
    """Register every service of ``configuration`` into ``container``.

    Returns:
        Number of services registered

    Raises:
        ConfigurationError: If a dotted path cannot be imported or the class
            does not implement its interface
    """
    for interface_path, definition in configuration.services.items():
        definition = definition or ServiceDefinition()
        interface = import_string(interface_path)
        implementation = import_string(definition.class_path) if definition.class_path else interface

        container.register(
            interface,
            implementation,
            singleton=definition.singleton,
            arguments=definition.arguments,
        )
        logger.info(f"Registered service {interface_path} -> {implementation.__name__}")

    return len(configuration.services)


def load_includes(container: ServiceContainer, includes: list[Path]) -> int:
    """Load every include file into the container, in order; later files override earlier ones."""
    total = 0
    for include in includes:
        total += register_services(container, load_service_configuration(include))
    return total
