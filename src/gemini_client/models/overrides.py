"""Pydantic model for caller-supplied configuration overrides."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Overrides(BaseModel):
    """
    Raw override candidates keyed by their camelCase wire names.
    Values are kept as given; the resolver skips any that are unusable.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    project: Any = None
    location: Any = None
    model: Any = None
    system_instruction_parts: Any = None
    # Legacy synonym for system_instruction_parts.
    system_instruction: Any = None
    safety_settings: Any = None
    generation_config: Any = None
