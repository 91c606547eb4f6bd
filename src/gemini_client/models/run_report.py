"""Pydantic model for the JSON report written by the vertex command."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RunError(BaseModel):
    name: str
    message: str


class RunReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    input_file: str
    generated_at: str
    config: dict[str, Any]
    overrides: dict[str, Any]
    request: Optional[Any] = None
    response: Optional[Any] = None
    error: Optional[RunError] = None
