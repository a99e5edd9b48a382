"""Base model for payloads returned by the remote store.

Glacier responses use camelCase keys (``uploadId``, ``archiveId``); models
declare snake_case fields and accept either spelling.
"""

from __future__ import annotations

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class BaseModel(PydanticBaseModel):
    """Immutable response model; unknown keys such as ResponseMetadata are dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )
