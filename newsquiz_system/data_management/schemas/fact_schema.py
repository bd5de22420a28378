"""Extracted fact schema - headline facts pulled from one article."""

from pydantic import BaseModel, Field


class ExtractedFact(BaseModel):
    """A short factual statement plus the context supporting it."""

    statement: str = Field(..., min_length=1, description="The headline fact")
    context: str = Field(default="", description="Who, when, why it matters")

    model_config = {"frozen": True}
