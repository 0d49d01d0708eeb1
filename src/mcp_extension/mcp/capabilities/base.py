"""
Base classes for MCP capabilities.

This module defines the abstract base classes for the two kinds of capability
an extension exposes to the host: tools (named actions returning a JSON
string) and resources (URI-addressed data returning a ``ResourceRecord``).
"""

import inspect
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from mcp import types
from pydantic import BaseModel, ValidationError

from mcp_extension.mcp.structured import (
    JSON_MIME_TYPE,
    ResourceRecord,
    make_record,
    to_json,
)
from mcp_extension.mcp.structured.models import MIME_TYPE_PATTERN, URI_PATTERN
from mcp_extension.utils.errors import ToolArgumentError
from mcp_extension.utils.logging import setup_logging

logger = setup_logging(__name__)

# {framework}-{action}, lowercase and hyphen-separated
TOOL_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)+$")
SCHEME_MAX_LENGTH = 32

EMPTY_INPUT_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


@dataclass
class CapabilityMetadata:
    """Metadata for MCP capabilities."""

    name: str
    kind: str
    version: str
    description: str
    author: str | None = None
    tags: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to dictionary."""
        return {
            "name": self.name,
            "kind": self.kind,
            "version": self.version,
            "description": self.description,
            "author": self.author,
            "tags": self.tags or [],
        }


class Capability(ABC):
    """Abstract base class for tools and resources.

    Subclasses receive their collaborators through ``__init__``; the service
    container resolves constructor parameters by their type annotation.
    Capabilities keep no per-call state.
    """

    kind: str = "capability"

    _metadata: CapabilityMetadata | None = None
    _validated: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the unique name of this capability."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get a human-readable description used by the AI model."""
        pass

    @property
    def version(self) -> str:
        """Get the version of this capability."""
        return "1.0.0"

    @property
    def tags(self) -> list[str]:
        """Get tags used to group capabilities."""
        return []

    @property
    def key(self) -> str:
        """Get the registry key: tool name or resource URI."""
        return self.name

    @property
    def metadata(self) -> CapabilityMetadata:
        """Get capability metadata."""
        if self._metadata is None:
            self._metadata = CapabilityMetadata(
                name=self.name,
                kind=self.kind,
                version=self.version,
                description=self.description,
                author=getattr(self, 'author', None),
                tags=list(self.tags),
            )
        return self._metadata

    def validate(self) -> bool:
        """Validate that the capability is properly declared.

        Returns:
            True if capability is valid, False otherwise
        """
        problems = self.get_validation_errors()
        for problem in problems:
            logger.error(f"{self.__class__.__name__}: {problem}")

        self._validated = not problems
        if self._validated:
            logger.debug(f"{self.kind.capitalize()} {self.key} validation passed")
        return self._validated

    def get_validation_errors(self) -> list[str]:
        """Return contract violations; an empty list means valid."""
        errors = []
        if not self.name or not isinstance(self.name, str):
            errors.append("name must be a non-empty string")
        if not self.description or not isinstance(self.description, str):
            errors.append("description must be a non-empty string")
        return errors

    @property
    def is_validated(self) -> bool:
        """Check if capability has been validated."""
        return self._validated

    def on_load(self) -> None:
        """Called when the capability is loaded into the registry."""
        logger.debug(f"{self.kind.capitalize()} {self.key} loaded")

    def on_unload(self) -> None:
        """Called when the capability is unloaded from the registry."""
        logger.debug(f"{self.kind.capitalize()} {self.key} unloaded")

    def __repr__(self) -> str:
        """String representation of the capability."""
        return f"<{self.__class__.__name__}: {self.key} v{self.version}>"


class ToolCapability(Capability):
    """Base class for tools: named actions returning a JSON string.

    Declare typed parameters with ``input_model``; its fields are bound and
    validated before ``execute`` runs, so ``execute`` may trust its arguments.
    """

    kind = "tool"
    input_model: type[BaseModel] | None = None

    @abstractmethod
    def execute(self, **arguments: Any) -> str:
        """Run the tool with already-bound arguments.

        Returns:
            A JSON document as a string

        Raises:
            SerializationError: If the result cannot be encoded as JSON
        """
        pass

    def to_json(self, payload: Any) -> str:
        """Encode a result payload; encoding failures propagate."""
        return to_json(payload)

    def get_input_schema(self) -> dict[str, Any]:
        """Get the JSON schema of the tool's parameters."""
        if self.input_model is None:
            return dict(EMPTY_INPUT_SCHEMA)
        return self.input_model.model_json_schema()

    def get_tool_definition(self) -> types.Tool:
        """Get the MCP tool definition for this capability."""
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.get_input_schema(),
        )

    def bind_arguments(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Validate raw arguments against ``input_model``.

        Returns:
            Keyword arguments for ``execute``

        Raises:
            ToolArgumentError: If arguments do not match the declared parameters
        """
        arguments = arguments or {}

        if self.input_model is None:
            if arguments:
                raise ToolArgumentError(
                    f"Tool '{self.name}' takes no arguments, got {sorted(arguments)}",
                    context={"tool": self.name},
                )
            return {}

        try:
            bound = self.input_model.model_validate(arguments)
        except ValidationError as e:
            raise ToolArgumentError(
                f"Invalid arguments for tool '{self.name}': {e.error_count()} error(s)",
                suggestions=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
                context={"tool": self.name},
            ) from e

        return {field: getattr(bound, field) for field in type(bound).model_fields}

    def get_validation_errors(self) -> list[str]:
        errors = super().get_validation_errors()
        if isinstance(self.name, str) and not TOOL_NAME_PATTERN.match(self.name):
            errors.append(f"tool name '{self.name}' must look like '{{framework}}-{{action}}' (lowercase, hyphenated)")

        if self.input_model is not None:
            parameters = inspect.signature(self.execute).parameters
            accepts_any = any(p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters.values())
            missing = [f for f in self.input_model.model_fields if f not in parameters]
            if missing and not accepts_any:
                errors.append(f"execute() does not accept declared parameters {missing}")
        return errors

    def __call__(self, **arguments: Any) -> str:
        """Bind ``arguments`` and execute."""
        return self.execute(**self.bind_arguments(arguments))


class ResourceCapability(Capability):
    """Base class for resources: parameterless providers addressed by a stable URI."""

    kind = "resource"

    @property
    @abstractmethod
    def uri(self) -> str:
        """Get the stable ``{scheme}://{path}`` URI of this resource."""
        pass

    @property
    def mime_type(self) -> str:
        """Get the MIME type describing how ``text`` is interpreted."""
        return JSON_MIME_TYPE

    @property
    def key(self) -> str:
        return self.uri

    @property
    def scheme(self) -> str:
        match = URI_PATTERN.match(self.uri or "")
        return match.group("scheme") if match else ""

    @abstractmethod
    def read(self) -> ResourceRecord:
        """Produce the resource record.

        Raises:
            SerializationError: If the text does not match the declared MIME type
        """
        pass

    def build_record(self, text: str) -> ResourceRecord:
        """Build a record with this resource's declared URI and MIME type."""
        return make_record(self.uri, self.mime_type, text)

    def build_json_record(self, payload: Any) -> ResourceRecord:
        """Encode ``payload`` as JSON and wrap it in a record."""
        return self.build_record(to_json(payload))

    def get_resource_definition(self) -> types.Resource:
        """Get the MCP resource definition for this capability."""
        return types.Resource(
            uri=self.uri,
            name=self.name,
            description=self.description,
            mimeType=self.mime_type,
        )

    def get_validation_errors(self) -> list[str]:
        errors = super().get_validation_errors()
        if not isinstance(self.uri, str) or not URI_PATTERN.match(self.uri):
            errors.append(f"uri '{self.uri}' must look like '{{scheme}}://{{path}}'")
        elif len(self.scheme) > SCHEME_MAX_LENGTH:
            errors.append(f"uri scheme '{self.scheme}' is longer than {SCHEME_MAX_LENGTH} characters")
        if not isinstance(self.mime_type, str) or not MIME_TYPE_PATTERN.match(self.mime_type):
            errors.append(f"mime type '{self.mime_type}' must be a type/subtype string")
        return errors
