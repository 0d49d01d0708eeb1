"""
Pydantic models for structured MCP tool and resource responses.
"""

import json
import re

from pydantic import BaseModel, ConfigDict, Field, model_validator

JSON_MIME_TYPE = "application/json"
TEXT_MIME_TYPE = "text/plain"

URI_PATTERN = re.compile(r"^(?P<scheme>[a-z][a-z0-9+.-]*)://(?P<path>.+)$")
MIME_TYPE_PATTERN = re.compile(r"^[\w.+-]+/[\w.+-]+$")


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


class EntityItem(BaseModel):
    id: str
    name: str
    description: str = ""
    fields: list[str] = Field(default_factory=list)


class EntityListResponse(BaseModel):
    entities: list[EntityItem]
    count: int


class EntityDetailResponse(BaseModel):
    entity: EntityItem


class ExtensionConfigResponse(BaseModel):
    name: str
    version: str
    namespace: str
    tools: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)


class ResourceRecord(BaseModel):
    """The record a resource hands to the host: exactly ``uri``, ``mimeType`` and ``text``."""

    uri: str
    mimeType: str
    text: str

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _check_contract(self) -> "ResourceRecord":
        if not URI_PATTERN.match(self.uri):
            raise ValueError(f"uri '{self.uri}' does not match '{{scheme}}://{{path}}'")
        if not MIME_TYPE_PATTERN.match(self.mimeType):
            raise ValueError(f"mimeType '{self.mimeType}' is not a type/subtype string")
        if self.mimeType == JSON_MIME_TYPE:
            try:
                json.loads(self.text, parse_constant=_reject_constant)
            except ValueError as e:
                raise ValueError(f"text of {self.uri} is declared {JSON_MIME_TYPE} but is not valid JSON: {e}") from e
        return self

    @property
    def scheme(self) -> str:
        return URI_PATTERN.match(self.uri).group("scheme")

    def to_dict(self) -> dict[str, str]:
        return {"uri": self.uri, "mimeType": self.mimeType, "text": self.text}
