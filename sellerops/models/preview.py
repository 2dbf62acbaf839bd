"""
Preview models - read-only before/after projection of a command.
"""
from typing import Optional

from pydantic import BaseModel, Field


class DiffLine(BaseModel):
    """A single row of the preview. Purely derived, never persisted."""
    label: str
    before: Optional[str] = None
    after: Optional[str] = None
    warning: Optional[str] = None
    info: Optional[str] = None


class PreviewResult(BaseModel):
    """Preview lines for a command. Empty lines means no preview available."""
    lines: list[DiffLine] = Field(default_factory=list)
    loading: bool = False
    error: Optional[str] = Field(default=None, description="Set when the state fetch failed")

    @property
    def has_warnings(self) -> bool:
        return any(line.warning for line in self.lines)
