"""
Unit tests for the capability base classes.
"""

import json

import pytest
from mcp import types
from pydantic import BaseModel

from mcp_extension.mcp.capabilities.base import (
    CapabilityMetadata,
    ResourceCapability,
    ToolCapability,
)
from mcp_extension.mcp.structured import JSON_MIME_TYPE, TEXT_MIME_TYPE
from mcp_extension.utils.errors import SerializationError, ToolArgumentError

pytestmark = pytest.mark.unit


class GreetInput(BaseModel):
    who: str
    punctuation: str = "!"


class GreetTool(ToolCapability):
    """Tool with typed parameters."""

    input_model = GreetInput

    @property
    def name(self) -> str:
        return "test-greet"

    @property
    def description(self) -> str:
        return "Greet someone"

    @property
    def tags(self) -> list[str]:
        return ["test"]

    def execute(self, who: str, punctuation: str) -> str:
        return self.to_json({"greeting": f"hello {who}{punctuation}"})


class PingTool(ToolCapability):
    """Tool without parameters."""

    @property
    def name(self) -> str:
        return "test-ping"

    @property
    def description(self) -> str:
        return "Ping"

    def execute(self) -> str:
        return self.to_json({"pong": True})


class BadlyNamedTool(PingTool):
    @property
    def name(self) -> str:
        return "Ping_Tool"


class MismatchedTool(ToolCapability):
    input_model = GreetInput

    @property
    def name(self) -> str:
        return "test-mismatch"

    @property
    def description(self) -> str:
        return "execute() forgets a declared parameter"

    def execute(self, who: str) -> str:
        return self.to_json({})


class NoteResource(ResourceCapability):
    def __init__(self, text: str = "a note", mime_type: str = TEXT_MIME_TYPE, uri: str = "test://note"):
        self._text = text
        self._mime_type = mime_type
        self._uri = uri

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def name(self) -> str:
        return "test-note"

    @property
    def description(self) -> str:
        return "A note"

    @property
    def mime_type(self) -> str:
        return self._mime_type

    def read(self):
        return self.build_record(self._text)


class TestCapabilityMetadata:
    """Test CapabilityMetadata."""

    def test_to_dict(self):
        metadata = CapabilityMetadata(name="test-ping", kind="tool", version="1.0.0", description="Ping")

        data = metadata.to_dict()

        assert data["name"] == "test-ping"
        assert data["kind"] == "tool"
        assert data["author"] is None
        assert data["tags"] == []

    def test_capability_metadata(self):
        metadata = GreetTool().metadata

        assert metadata.name == "test-greet"
        assert metadata.kind == "tool"
        assert metadata.tags == ["test"]


class TestToolCapability:
    """Test the ToolCapability contract."""

    def test_validation(self):
        tool = GreetTool()

        assert not tool.is_validated
        assert tool.validate()
        assert tool.is_validated

    def test_invalid_name(self):
        tool = BadlyNamedTool()

        assert not tool.validate()
        assert any("Ping_Tool" in error for error in tool.get_validation_errors())

    def test_execute_must_accept_declared_parameters(self):
        errors = MismatchedTool().get_validation_errors()

        assert any("punctuation" in error for error in errors)

    def test_tool_definition(self):
        definition = GreetTool().get_tool_definition()

        assert isinstance(definition, types.Tool)
        assert definition.name == "test-greet"
        assert definition.inputSchema["type"] == "object"
        assert set(definition.inputSchema["properties"]) == {"who", "punctuation"}
        assert definition.inputSchema["required"] == ["who"]

    def test_tool_definition_without_parameters(self):
        assert PingTool().get_tool_definition().inputSchema == {"type": "object", "properties": {}}

    def test_bind_arguments_applies_defaults(self):
        assert GreetTool().bind_arguments({"who": "ada"}) == {"who": "ada", "punctuation": "!"}

    def test_bind_arguments_missing_parameter(self):
        with pytest.raises(ToolArgumentError) as exc_info:
            GreetTool().bind_arguments({})

        assert any(s.startswith("who:") for s in exc_info.value.suggestions)
        assert exc_info.value.context == {"tool": "test-greet"}

    def test_arguments_rejected_when_none_declared(self):
        with pytest.raises(ToolArgumentError, match="takes no arguments"):
            PingTool().bind_arguments({"unexpected": 1})

    def test_call(self):
        assert json.loads(GreetTool()(who="ada")) == {"greeting": "hello ada!"}

    def test_to_json_rejects_unserializable(self):
        with pytest.raises(SerializationError):
            PingTool().to_json({"value": object()})


class TestResourceCapability:
    """Test the ResourceCapability contract."""

    def test_validation(self):
        resource = NoteResource()

        assert resource.validate()
        assert resource.key == "test://note"
        assert resource.scheme == "test"

    def test_invalid_uri(self):
        resource = NoteResource(uri="not-a-uri")

        assert not resource.validate()

    def test_scheme_too_long(self):
        resource = NoteResource(uri=f"{'a' * 33}://note")

        assert any("longer than" in error for error in resource.get_validation_errors())

    def test_resource_definition(self):
        definition = NoteResource().get_resource_definition()

        assert isinstance(definition, types.Resource)
        assert str(definition.uri).rstrip("/") == "test://note"
        assert definition.mimeType == TEXT_MIME_TYPE

    def test_plain_text_is_unmodified(self):
        text = "  line one\n\tline two  \n"

        record = NoteResource(text=text).read()

        assert record.text == text

    def test_json_text_must_parse(self):
        resource = NoteResource(text="{not json", mime_type=JSON_MIME_TYPE)

        with pytest.raises(SerializationError):
            resource.read()

    def test_build_json_record(self):
        record = NoteResource(mime_type=JSON_MIME_TYPE).build_json_record({"a": 1})

        assert record.uri == "test://note"
        assert record.mimeType == JSON_MIME_TYPE
        assert json.loads(record.text) == {"a": 1}
