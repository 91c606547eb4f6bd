"""Pydantic model for word and character counts of a text."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TextStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    word_count: int
    character_count: int
    unique_word_count: int
