"""
Custom exception classes for the MCP extension.
"""

from typing import Any


class ExtensionError(Exception):
    """Base exception for all extension errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None
    ):
        """Initialize extension error with enhanced information.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            suggestions: List of suggested remediation steps
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.error_code = error_code or self.__class__.__name__.upper()
        self.suggestions = suggestions or []
        self.context = context or {}


class ConfigurationError(ExtensionError):
    """Raised when the manifest, service configuration or wiring is invalid."""
    pass


class DiscoveryError(ConfigurationError):
    """Raised when a capability module found in a scan directory cannot be loaded."""
    pass


class CapabilityError(ExtensionError):
    """Raised when a tool or resource violates its contract."""
    pass


class CapabilityNotFoundError(CapabilityError):
    """Raised when no tool or resource is registered under the requested name."""
    pass


class ToolArgumentError(CapabilityError):
    """Raised when tool arguments do not match the declared input model."""
    pass


class SerializationError(ExtensionError):
    """Raised when a payload cannot be represented as valid JSON."""
    pass


class ServiceError(ExtensionError):
    """Base exception for errors raised by collaborator services."""
    pass


class EntityNotFoundError(ServiceError):
    """Raised when the entity repository has no entity with the requested id."""
    pass
