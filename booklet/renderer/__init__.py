"""Renderer subsystem: Markdown to PDF through headless Chromium."""

from booklet.renderer.base import DocumentRenderer
from booklet.renderer.chromium import ChromiumRenderer
from booklet.renderer.markdown import MarkdownHtmlBuilder
from booklet.renderer.models import RenderError, RenderResult

__all__ = [
    "ChromiumRenderer",
    "DocumentRenderer",
    "MarkdownHtmlBuilder",
    "RenderError",
    "RenderResult",
]
