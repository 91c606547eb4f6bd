"""Pydantic model for a single system-instruction part."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class InstructionPart(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str
