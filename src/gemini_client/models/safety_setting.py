"""Pydantic model for a category/threshold safety pair."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from gemini_client.models.harm import HarmBlockThreshold, HarmCategory, resolve_enum_value


class SafetySetting(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Unknown strings/ints pass through so newer provider values still reach the SDK.
    category: HarmCategory | str | int
    threshold: HarmBlockThreshold | str | int

    @field_validator("category", mode="before")
    @classmethod
    def _resolve_category(cls, value: Any) -> Any:
        return resolve_enum_value(HarmCategory, value)

    @field_validator("threshold", mode="before")
    @classmethod
    def _resolve_threshold(cls, value: Any) -> Any:
        return resolve_enum_value(HarmBlockThreshold, value)
