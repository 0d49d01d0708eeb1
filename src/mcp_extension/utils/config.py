"""
Configuration management for the MCP extension.

This module provides centralized configuration using Pydantic settings
with support for environment variables and .env files.
"""

import logging
import re
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NAMESPACE_PATTERN = re.compile(r"^[a-z][a-z0-9]{0,31}$")


class ValidationResult(BaseModel):
    valid: bool = True
    errors: list[str] = []
    warnings: list[str] = []


class ExtensionSettings(BaseSettings):
    """MCP extension configuration settings."""

    # Extension identity
    extension_name: str = Field(default="example-extension", description="Human-readable extension name")
    extension_version: str = Field(default="0.1.0")
    namespace: str = Field(
        default="example",
        description="Tool name prefix and resource URI scheme, unique per host"
    )

    # Discovery
    manifest_path: str = Field(default="mcp-extension.yaml", description="Path to the discovery manifest")

    # Output
    json_indent: int = Field(default=2, description="Indentation used for JSON printed by the CLI")

    # MCP server settings
    mcp_server_name: str = Field(default="mcp-extension")
    mcp_server_version: str = Field(default="0.1.0")

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_structured: bool = Field(default=False, description="Emit JSON log lines")
    log_file: str | None = Field(default=None, description="Optional log file path")

    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file="config/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="MCP_EXTENSION_",
        extra="ignore",
    )

    def get_manifest_path(self) -> Path:
        """Get manifest path as Path object."""
        return Path(self.manifest_path).expanduser().resolve()

    def get_log_file_path(self) -> Path | None:
        """Get log file path as Path object, if file logging is enabled."""
        if not self.log_file:
            return None
        return Path(self.log_file).expanduser().resolve()

    def validate_settings(self) -> ValidationResult:
        """Validate settings and return status information."""
        status = ValidationResult()

        if not NAMESPACE_PATTERN.match(self.namespace):
            status.errors.append(
                f"Namespace '{self.namespace}' must be a short lowercase identifier (letters and digits)"
            )
            status.valid = False

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            status.errors.append(f"Unknown log level: {self.log_level}")
            status.valid = False

        if self.json_indent < 0:
            status.errors.append("JSON indent must not be negative")
            status.valid = False

        if not self.get_manifest_path().exists():
            status.warnings.append(
                f"Manifest not found at {self.get_manifest_path()}; built-in capabilities will be used"
            )

        return status


# Global settings instance
settings = ExtensionSettings()


def get_settings() -> ExtensionSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> ExtensionSettings:
    """Reload settings from environment and return new instance."""
    global settings
    settings = ExtensionSettings()
    return settings
