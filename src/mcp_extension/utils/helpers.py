"""
Common utility functions for the MCP extension.
"""

import importlib
import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from mcp_extension.utils.config import ExtensionSettings
from mcp_extension.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


def import_string(dotted_path: str) -> Any:
    """Import an attribute given its dotted path, e.g. ``package.module.ClassName``.

    Raises:
        ConfigurationError: If the module or attribute cannot be found
    """
    module_path, _, attribute = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"'{dotted_path}' is not a dotted import path")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot import module '{module_path}' for '{dotted_path}': {e}",
            suggestions=["Check the dotted path in the service configuration"],
        ) from e

    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationError(f"Module '{module_path}' has no attribute '{attribute}'") from e


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load a YAML file whose top level must be a mapping.

    An empty file yields an empty mapping.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}", context={"path": str(path)})

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read {path}: {e}", context={"path": str(path)}) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level", context={"path": str(path)})
    return data


def resolve_relative(base_dir: Path, value: str | Path) -> Path:
    """Resolve ``value`` against ``base_dir`` unless it is already absolute."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def validate_settings_or_exit(settings: ExtensionSettings) -> None:
    """
    Validate settings and exit with error message if invalid.

    Warnings are echoed but do not stop the process.
    """
    validation_result = settings.validate_settings()

    for warning in validation_result.warnings:
        click.echo(f"Warning: {warning}", err=True)
        logger.warning(f"Settings warning: {warning}")

    if not validation_result.valid:
        for error in validation_result.errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)
