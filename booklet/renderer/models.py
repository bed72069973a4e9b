"""Pydantic models for the renderer subsystem."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RenderError(Exception):
    """Wraps renderer-specific exceptions with context."""

    def __init__(self, renderer: str, operation: str, cause: Exception) -> None:
        self.renderer = renderer
        self.operation = operation
        super().__init__(f"{renderer} {operation} failed: {cause}")
        self.__cause__ = cause


class RenderResult(BaseModel):
    """Outcome of a successful conversion."""

    source_path: str
    destination_path: str
    size_bytes: int = Field(ge=0)
    elapsed_ms: int = Field(default=0, ge=0)
