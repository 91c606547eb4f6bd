"""Pydantic model for a fully resolved model configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gemini_client.models.instruction_part import InstructionPart
from gemini_client.models.safety_setting import SafetySetting


class ResolvedConfig(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project: str
    location: str
    model: str
    system_instruction_parts: list[InstructionPart] = Field(min_length=1)
    safety_settings: list[SafetySetting] = Field(default_factory=list)
    generation_config: dict[str, Any] = Field(default_factory=dict)
