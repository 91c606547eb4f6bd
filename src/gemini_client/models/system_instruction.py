"""Pydantic model for the wire-shaped system instruction."""

from __future__ import annotations

from pydantic import BaseModel, Field

from gemini_client.models.instruction_part import InstructionPart


class SystemInstruction(BaseModel):
    role: str = "system"
    parts: list[InstructionPart] = Field(default_factory=list)
