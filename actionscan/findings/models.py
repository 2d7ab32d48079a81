# Pydantic data models for lint findings: Finding, Location, Suggestion, Fix.

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class Location(BaseModel):
    """Where in the source a finding was reported (file, line, column)."""

    path: Path
    line: int = Field(..., ge=1, description="1-based line number")
    column: int = Field(..., ge=1, description="1-based column number")
    end_line: Optional[int] = Field(None, ge=1)
    end_column: Optional[int] = Field(None, ge=1)
    snippet: Optional[str] = None

    model_config = {"arbitrary_types_allowed": True, "frozen": True}


class Fix(BaseModel):
    """
    A pure text insertion: put `text` before byte `offset` of the source.

    line/column locate the same point for display and are not used when
    applying the edit.
    """

    offset: int = Field(..., ge=0, description="0-based byte offset")
    text: str
    line: int = Field(..., ge=1)
    column: int = Field(..., ge=1)

    model_config = {"frozen": True}


class Suggestion(BaseModel):
    """An opt-in fix with a human-readable description."""

    message_id: str
    description: str
    fix: Fix

    model_config = {"frozen": True}


class Finding(BaseModel):
    """A single issue reported by a rule (e.g. sync server action at line 3)."""

    rule_id: str
    message: str
    location: Location
    message_id: Optional[str] = None
    severity: str = Field(default="warning", description="e.g. error, warning, info")
    suggestions: tuple[Suggestion, ...] = ()

    model_config = {"arbitrary_types_allowed": True, "frozen": True}
