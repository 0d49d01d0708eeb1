"""
Structured response models and JSON helpers for MCP capabilities.
"""

from .formatters import (
    entity_detail_to_json,
    entity_list_to_json,
    extension_config_to_json,
    make_record,
    to_json,
)
from .models import (
    JSON_MIME_TYPE,
    TEXT_MIME_TYPE,
    EntityDetailResponse,
    EntityItem,
    EntityListResponse,
    ExtensionConfigResponse,
    ResourceRecord,
)

__all__ = [
    "JSON_MIME_TYPE",
    "TEXT_MIME_TYPE",
    "EntityDetailResponse",
    "EntityItem",
    "EntityListResponse",
    "ExtensionConfigResponse",
    "ResourceRecord",
    "entity_detail_to_json",
    "entity_list_to_json",
    "extension_config_to_json",
    "make_record",
    "to_json",
]
