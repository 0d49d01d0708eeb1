"""
Dependency injection container for the MCP extension.

This module provides a service container that manages collaborator services
and builds capability objects by resolving their constructor parameters.
"""

import inspect
import typing
from typing import Any, Dict, Type, TypeVar, Callable, Optional

from mcp_extension.utils.config import ExtensionSettings
from mcp_extension.utils.logging import setup_logging
from mcp_extension.utils.errors import ConfigurationError

logger = setup_logging(__name__)

T = TypeVar('T')


class ServiceContainer:
    """Dependency injection container for managing services and their dependencies."""

    def __init__(self, settings: ExtensionSettings):
        """Initialize the service container.

        Args:
            settings: Application settings, injected into any ``settings`` parameter
        """
        self.settings = settings
        self._singletons: Dict[Type, Any] = {}
        self._registrations: Dict[Type, 'ServiceRegistration'] = {}
        self._building: set = set()  # Track services being built to prevent cycles

    def register(
        self,
        interface: Type[T],
        implementation: Optional[Type[T]] = None,
        singleton: bool = True,
        factory: Optional[Callable[[], T]] = None,
        arguments: Optional[Dict[str, Any]] = None
    ) -> None:
        """Register a service with the container.

        Args:
            interface: The interface/abstract class
            implementation: The concrete implementation (defaults to the interface itself)
            singleton: Whether to treat as singleton
            factory: Optional factory function for custom instantiation
            arguments: Explicit constructor arguments, used before autowiring
        """
        if not inspect.isclass(interface):
            raise ConfigurationError(
                f"Service interface {interface!r} must be a class",
                suggestions=["Use the dotted path of an interface class as the service key"],
            )

        if implementation is None and factory is None:
            implementation = interface

        if implementation is not None and not inspect.isclass(implementation):
            raise ConfigurationError(f"Implementation for {interface.__name__} must be a class")

        if implementation is not None and implementation is not interface and not issubclass(implementation, interface):
            raise ConfigurationError(
                f"{implementation.__name__} does not implement {interface.__name__}",
                context={"interface": interface.__name__, "implementation": implementation.__name__},
            )

        impl_name = implementation.__name__ if implementation is not None else "factory"
        logger.debug(f"Registering {interface.__name__} -> {impl_name}")

        self._singletons.pop(interface, None)
        self._registrations[interface] = ServiceRegistration(
            interface=interface,
            implementation=implementation,
            singleton=singleton,
            factory=factory,
            arguments=arguments
        )

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """Register an existing instance.

        Args:
            interface: The interface/abstract class
            instance: The instance to register
        """
        logger.debug(f"Registering instance for {interface.__name__}")
        self._singletons[interface] = instance

    def has(self, interface: Type) -> bool:
        """Check whether the container can provide ``interface``."""
        return interface in self._singletons or interface in self._registrations

    def get(self, interface: Type[T]) -> T:
        """Get a service instance.

        Args:
            interface: The interface/abstract class to get

        Returns:
            Service instance

        Raises:
            ConfigurationError: If service is not registered or circular dependency detected
        """
        if interface in self._building:
            logger.error(f"Circular dependency detected for {interface.__name__}")
            raise ConfigurationError(f"Circular dependency detected for {interface.__name__}")

        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._registrations:
            logger.debug(f"Available registrations: {[i.__name__ for i in self._registrations]}")
            raise ConfigurationError(
                f"Service {interface.__name__} is not registered",
                suggestions=[f"Declare {interface.__module__}.{interface.__qualname__} in a services include"],
            )

        registration = self._registrations[interface]

        self._building.add(interface)
        try:
            if registration.factory:
                instance = registration.factory()
            else:
                instance = self.create_instance(registration.implementation, registration.arguments)

            if registration.singleton:
                self._singletons[interface] = instance

            logger.debug(f"Created instance of {interface.__name__}")
            return instance
        finally:
            self._building.discard(interface)

    def create_instance(self, implementation: Type[T], arguments: Optional[Dict[str, Any]] = None) -> T:
        """Create an instance with dependency injection.

        Constructor parameters are resolved in order: explicit ``arguments``,
        registered services matching the annotation, the settings object,
        then parameter defaults.

        Args:
            implementation: The class to instantiate
            arguments: Explicit constructor arguments

        Returns:
            Instance with dependencies injected

        Raises:
            ConfigurationError: If a required parameter cannot be resolved
        """
        arguments = arguments or {}
        parameters = inspect.signature(implementation.__init__).parameters
        hints = self._constructor_hints(implementation)

        unknown = set(arguments) - set(parameters)
        if unknown and not any(p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters.values()):
            raise ConfigurationError(
                f"{implementation.__name__} has no constructor parameters named {sorted(unknown)}"
            )

        args = dict(arguments)
        for param_name, param in parameters.items():
            if param_name == 'self' or param_name in args:
                continue
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            annotation = hints.get(param_name, param.annotation)

            if inspect.isclass(annotation) and self.has(annotation):
                args[param_name] = self.get(annotation)
            elif annotation is ExtensionSettings or (param_name == 'settings' and annotation is inspect.Parameter.empty):
                args[param_name] = self.settings
            elif param.default is not inspect.Parameter.empty:
                continue
            else:
                type_name = getattr(annotation, "__name__", str(annotation))
                raise ConfigurationError(
                    f"Cannot resolve parameter '{param_name}' ({type_name}) of {implementation.__name__}",
                    suggestions=[
                        f"Register a service for {type_name}",
                        "Or pass the value through 'arguments' in the service configuration",
                    ],
                    context={"class": implementation.__name__, "parameter": param_name},
                )

        return implementation(**args)

    @staticmethod
    def _constructor_hints(implementation: Type) -> Dict[str, Any]:
        """Resolve string annotations of ``__init__``; unresolved names are left to ``inspect``."""
        try:
            return typing.get_type_hints(implementation.__init__)
        except (NameError, TypeError):
            return {}

    def warm_up(self) -> None:
        """Build every singleton now so wiring errors surface at startup."""
        for interface, registration in list(self._registrations.items()):
            if registration.singleton and interface not in self._singletons:
                self.get(interface)
        logger.info(f"Service container ready: {len(self._singletons)} singleton(s)")

    def get_service_info(self) -> Dict[str, Any]:
        """Get information about registered services.

        Returns:
            Dictionary with service information
        """
        info = {
            "registered_services": len(self._registrations),
            "singleton_instances": len(self._singletons),
            "services": {}
        }

        for interface, registration in self._registrations.items():
            implementation = registration.implementation
            info["services"][interface.__name__] = {
                "implementation": implementation.__name__ if implementation is not None else "factory",
                "singleton": registration.singleton,
                "has_instance": interface in self._singletons
            }

        return info

    def dispose(self) -> None:
        """Dispose of all services and clean up resources."""
        logger.info("Disposing service container")

        # Close singleton services that have a close method
        for interface, instance in self._singletons.items():
            if hasattr(instance, 'close'):
                instance.close()
                logger.debug(f"Closed service {interface.__name__}")

        self._singletons.clear()
        self._registrations.clear()
        self._building.clear()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.dispose()


class ServiceRegistration:
    """Represents a service registration in the container."""

    def __init__(
        self,
        interface: Type,
        implementation: Optional[Type],
        singleton: bool = True,
        factory: Optional[Callable] = None,
        arguments: Optional[Dict[str, Any]] = None
    ):
        self.interface = interface
        self.implementation = implementation
        self.singleton = singleton
        self.factory = factory
        self.arguments = arguments or {}
