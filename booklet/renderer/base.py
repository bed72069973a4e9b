"""Abstract document renderer interface for booklet."""

from __future__ import annotations

from abc import ABC, abstractmethod

from booklet.config.models import ConversionJob
from booklet.renderer.models import RenderResult


class DocumentRenderer(ABC):
    """Turns a Markdown source into a PDF at the job's destination.

    Implementations enforce the job's file preconditions themselves and
    signal failure by raising; nothing is written when they do.
    """

    name: str = "renderer"

    async def __aenter__(self) -> DocumentRenderer:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    @abstractmethod
    async def render(self, job: ConversionJob) -> RenderResult:
        """Render one job and return what was written."""
        ...
