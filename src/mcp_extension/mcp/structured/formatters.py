"""
Helpers to convert capability results to JSON payloads.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from mcp_extension.utils.errors import SerializationError

from .models import (
    EntityDetailResponse,
    EntityItem,
    EntityListResponse,
    ExtensionConfigResponse,
    ResourceRecord,
)

DEFAULT_INDENT = 2


def to_json(payload: Any, indent: int = DEFAULT_INDENT) -> str:
    """Serialize ``payload`` to a pretty-printed JSON string.

    Pydantic models are dumped in JSON mode first. NaN and infinities are
    rejected so the result is always strict JSON.

    Raises:
        SerializationError: If the payload is not representable as JSON
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")

    try:
        return json.dumps(payload, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Payload is not JSON-serializable: {e}",
            context={"payload_type": type(payload).__name__},
        ) from e


def make_record(uri: str, mime_type: str, text: str) -> ResourceRecord:
    """Build a resource record, raising ``SerializationError`` when it would be malformed."""
    try:
        return ResourceRecord(uri=uri, mimeType=mime_type, text=text)
    except ValidationError as e:
        raise SerializationError(
            f"Invalid resource record for {uri}: {e.errors()[0]['msg']}",
            context={"uri": uri, "mimeType": mime_type},
        ) from e


def entity_list_to_json(entities: Sequence[EntityItem]) -> dict[str, Any]:
    resp = EntityListResponse(entities=list(entities), count=len(entities))
    return resp.model_dump(mode="json")


def entity_detail_to_json(entity: EntityItem) -> dict[str, Any]:
    return EntityDetailResponse(entity=entity).model_dump(mode="json")


def extension_config_to_json(
    name: str,
    version: str,
    namespace: str,
    tools: Sequence[str] = (),
    resources: Sequence[str] = (),
) -> dict[str, Any]:
    resp = ExtensionConfigResponse(
        name=name,
        version=version,
        namespace=namespace,
        tools=sorted(tools),
        resources=sorted(resources),
    )
    return resp.model_dump(mode="json")
