"""Pydantic models for GHC's ``-ddump-json`` message records."""

from pydantic import BaseModel, ConfigDict, Field


class GhcSpan(BaseModel):
    """Source location; one-based, inclusive on both ends."""

    model_config = ConfigDict(populate_by_name=True)

    file: str
    start_line: int = Field(alias="startLine", ge=1)
    start_col: int = Field(alias="startCol", ge=1)
    end_line: int = Field(alias="endLine", ge=1)
    end_col: int = Field(alias="endCol", ge=1)


class GhcMessage(BaseModel):
    """One JSON line printed by GHCi when ``-ddump-json`` is on.

    Unknown keys are ignored; GHC adds fields between releases.
    """

    span: GhcSpan | None = None
    reason: str | None = None
    severity: str = ""
    doc: str = ""
