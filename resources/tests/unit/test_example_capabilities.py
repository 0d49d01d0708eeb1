"""
Unit tests for the bundled example tools and resources.
"""

import json

import pytest

from mcp_extension.mcp.capabilities.examples import README_TEXT
from mcp_extension.mcp.structured import JSON_MIME_TYPE, TEXT_MIME_TYPE
from mcp_extension.services.entities import StaticEntityRepository
from mcp_extension.utils.config import ExtensionSettings
from mcp_extension.utils.errors import ConfigurationError, EntityNotFoundError, ToolArgumentError
from resources.tests.helpers.container import FakeEntityRepository, make_container, make_registry

pytestmark = pytest.mark.unit


@pytest.fixture
def registry():
    return make_registry()


class TestListEntities:
    """Test example-list-entities."""

    def test_returns_fixture_entities(self, registry):
        payload = json.loads(registry.call_tool("example-list-entities"))

        assert set(payload) == {"entities", "count"}
        assert payload["count"] == 3
        assert [e["id"] for e in payload["entities"]] == ["order", "product", "user"]
        assert "email" in payload["entities"][2]["fields"]

    def test_uses_injected_repository(self):
        fake = FakeEntityRepository([{"id": "x", "name": "X"}, {"id": "y", "name": "Y"}])
        registry = make_registry(make_container(entities=fake))

        payload = json.loads(registry.call_tool("example-list-entities", {}))

        assert payload["count"] == 2
        assert fake.calls == ["list_entities"]

    def test_empty_repository(self):
        registry = make_registry(make_container(entities=FakeEntityRepository([])))

        assert json.loads(registry.call_tool("example-list-entities")) == {"entities": [], "count": 0}

    def test_identical_output_on_repeat(self, registry):
        assert registry.call_tool("example-list-entities") == registry.call_tool("example-list-entities")

    def test_takes_no_arguments(self, registry):
        with pytest.raises(ToolArgumentError):
            registry.call_tool("example-list-entities", {"limit": 1})


class TestDescribeEntity:
    """Test example-describe-entity."""

    def test_describe(self, registry):
        payload = json.loads(registry.call_tool("example-describe-entity", {"entity_id": "user"}))

        assert payload["entity"]["id"] == "user"
        assert payload["entity"]["name"] == "User"

    def test_unknown_entity_propagates(self, registry):
        with pytest.raises(EntityNotFoundError) as exc_info:
            registry.call_tool("example-describe-entity", {"entity_id": "ghost"})

        assert exc_info.value.context == {"entity_id": "ghost"}

    @pytest.mark.parametrize("arguments", [{}, {"entity_id": ""}, {"entity_id": "user", "verbose": True}])
    def test_invalid_arguments(self, arguments):
        fake = FakeEntityRepository()
        registry = make_registry(make_container(entities=fake))

        with pytest.raises(ToolArgumentError):
            registry.call_tool("example-describe-entity", arguments)

        assert fake.calls == []

    def test_input_schema(self, registry):
        schema = registry.get_tool("example-describe-entity").get_input_schema()

        assert schema["required"] == ["entity_id"]
        assert schema["additionalProperties"] is False


class TestConfigResource:
    """Test example://config."""

    def test_record(self, registry):
        record = registry.read_resource("example://config").to_dict()

        assert set(record) == {"uri", "mimeType", "text"}
        assert record["uri"] == "example://config"
        assert record["mimeType"] == JSON_MIME_TYPE

        config = json.loads(record["text"])
        assert config["name"] == "example-extension"
        assert config["namespace"] == "example"
        assert config["tools"] == ["example-describe-entity", "example-list-entities"]
        assert config["resources"] == ["example://config", "example://readme"]

    def test_reflects_settings(self):
        settings = ExtensionSettings(_env_file=None, extension_name="acme-tools", extension_version="2.0.0")
        registry = make_registry(make_container(settings=settings))

        config = json.loads(registry.read_resource("example://config").text)

        assert config["name"] == "acme-tools"
        assert config["version"] == "2.0.0"

    def test_identical_output_on_repeat(self, registry):
        assert registry.read_resource("example://config") == registry.read_resource("example://config")


class TestReadmeResource:
    """Test example://readme."""

    def test_text_returned_unmodified(self, registry):
        record = registry.read_resource("example://readme")

        assert record.uri == "example://readme"
        assert record.mimeType == TEXT_MIME_TYPE
        assert record.text == README_TEXT


class TestStaticEntityRepository:
    """Test the static entity collaborator."""

    def test_sorted_by_id(self):
        repository = StaticEntityRepository([{"id": "b", "name": "B"}, {"id": "a", "name": "A"}])

        assert [e.id for e in repository.list_entities()] == ["a", "b"]

    def test_duplicate_ids(self):
        with pytest.raises(ConfigurationError, match="Duplicate entity id"):
            StaticEntityRepository([{"id": "a", "name": "A"}, {"id": "a", "name": "Again"}])

    def test_invalid_definition(self):
        with pytest.raises(ConfigurationError, match="Invalid entity definition"):
            StaticEntityRepository([{"name": "no id"}])

    def test_unknown_entity(self):
        with pytest.raises(EntityNotFoundError):
            StaticEntityRepository().get_entity("ghost")
