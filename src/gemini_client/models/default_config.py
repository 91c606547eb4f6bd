"""Pydantic model for the bundled default configuration."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from gemini_client.models.instruction_part import InstructionPart
from gemini_client.models.safety_setting import SafetySetting


class DefaultConfig(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    project: str
    location: str
    model: str
    system_instruction_parts: tuple[InstructionPart, ...] = Field(min_length=1)
    generation_config: Mapping[str, Any] = Field(default_factory=dict)
    safety_settings: tuple[SafetySetting, ...] = ()

    @field_validator("generation_config", mode="after")
    @classmethod
    def _freeze_generation_config(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))
