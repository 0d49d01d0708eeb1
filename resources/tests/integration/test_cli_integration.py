"""
Integration tests for the mcp-extension CLI.
"""

import json

import pytest
from click.testing import CliRunner

import mcp_extension.main as main_module
from mcp_extension.main import cli
from mcp_extension.mcp.capabilities.examples import README_TEXT
from mcp_extension.utils.config import ExtensionSettings

pytestmark = pytest.mark.integration


@pytest.fixture
def runner(monkeypatch, settings):
    # Keep dictConfig from binding handlers to the runner's temporary streams
    monkeypatch.setattr(main_module, "configure_root_logging", lambda **kwargs: None)
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    return CliRunner()


def test_list(runner):
    result = runner.invoke(cli, ["list"])

    assert result.exit_code == 0, result.output
    assert "example-list-entities" in result.stdout
    assert "example-describe-entity" in result.stdout
    assert "example://config" in result.stdout
    assert "example://readme" in result.stdout


def test_list_json(runner):
    result = runner.invoke(cli, ["list", "--json"])

    info = json.loads(result.stdout)
    assert info["total_tools"] == 2
    assert info["namespace"] == "example"


def test_call(runner):
    result = runner.invoke(cli, ["call", "example-list-entities"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["count"] == 3


def test_call_with_arguments(runner):
    result = runner.invoke(cli, ["call", "example-describe-entity", "--args", '{"entity_id": "product"}'])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["entity"]["name"] == "Product"


def test_call_unknown_tool(runner):
    result = runner.invoke(cli, ["call", "example-nothing"])

    assert result.exit_code == 1
    assert "CAPABILITYNOTFOUNDERROR" in result.output


def test_call_unknown_entity(runner):
    result = runner.invoke(cli, ["call", "example-describe-entity", "--args", '{"entity_id": "ghost"}'])

    assert result.exit_code == 1
    assert "ENTITYNOTFOUNDERROR" in result.output


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]"])
def test_call_rejects_bad_arguments(runner, raw):
    result = runner.invoke(cli, ["call", "example-list-entities", "--args", raw])

    assert result.exit_code == 2


def test_read(runner):
    result = runner.invoke(cli, ["read", "example://readme"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"uri": "example://readme", "mimeType": "text/plain", "text": README_TEXT}


def test_read_with_repository_manifest(runner, repo_root):
    result = runner.invoke(cli, ["--manifest", str(repo_root / "mcp-extension.yaml"), "read", "example://config"])

    assert result.exit_code == 0, result.output
    record = json.loads(result.stdout)
    assert record["uri"] == "example://config"
    assert json.loads(record["text"])["tools"] == ["example-describe-entity", "example-list-entities"]


def test_validate(runner):
    result = runner.invoke(cli, ["validate"])

    assert result.exit_code == 0, result.output
    assert "OK: 2 tool(s), 2 resource(s)" in result.stdout


def test_validate_missing_manifest(runner, tmp_path):
    result = runner.invoke(cli, ["--manifest", str(tmp_path / "missing.yaml"), "validate"])

    assert result.exit_code == 1
    assert "Manifest not found" in result.output


def test_validate_invalid_settings(monkeypatch, tmp_path):
    bad = ExtensionSettings(_env_file=None, manifest_path=str(tmp_path / "m.yaml"), namespace="NOT OK")
    monkeypatch.setattr(main_module, "configure_root_logging", lambda **kwargs: None)
    monkeypatch.setattr(main_module, "get_settings", lambda: bad)

    result = CliRunner().invoke(cli, ["validate"])

    assert result.exit_code == 1
    assert "Namespace 'NOT OK'" in result.output
