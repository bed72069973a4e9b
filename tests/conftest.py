"""Shared test fixtures for booklet."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from booklet.config.models import BookletConfig, ConversionJob, RenderOptions
from booklet.renderer.base import DocumentRenderer
from booklet.renderer.chromium import check_preconditions
from booklet.renderer.models import RenderResult

FAKE_PDF = b"%PDF-1.4\n% booklet test\n%%EOF\n"

SAMPLE_MARKDOWN = """\
# Field Guide

Welcome to the *booklet*.

| Bird | Call |
|------|------|
| Wren | trill |

```python
def hello():
    return "world"
```
"""

SAMPLE_CSS = "body { font-family: serif; color: #222; }\n"


class FakeRenderer(DocumentRenderer):
    """Writes FAKE_PDF after checking the same preconditions as the real renderer."""

    name = "fake"

    def __init__(self) -> None:
        self.jobs: list[ConversionJob] = []
        self.entered = 0
        self.exited = 0

    async def __aenter__(self):
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.exited += 1

    async def render(self, job: ConversionJob) -> RenderResult:
        self.jobs.append(job)
        source, _, destination = check_preconditions(job)
        destination.write_bytes(FAKE_PDF)
        return RenderResult(
            source_path=str(source),
            destination_path=str(destination),
            size_bytes=len(FAKE_PDF),
        )


@pytest.fixture
def booklet_dir(tmp_path):
    """A directory laid out like a booklet project: booklet.md and css/style.css."""
    (tmp_path / "booklet.md").write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "style.css").write_text(SAMPLE_CSS, encoding="utf-8")
    return tmp_path


@pytest.fixture
def sample_job(booklet_dir: Path):
    return ConversionJob(
        source_path=str(booklet_dir / "booklet.md"),
        destination_path=str(booklet_dir / "booklet.pdf"),
        options=RenderOptions(
            stylesheet_path=str(booklet_dir / "css" / "style.css"),
            render_delay_ms=0,
        ),
    )


@pytest.fixture
def sample_config():
    return BookletConfig()


@pytest.fixture
def fake_pdf():
    return FAKE_PDF


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def mock_page():
    page = MagicMock(name="Page")
    page.goto = AsyncMock()
    page.emulate_media = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.pdf = AsyncMock(return_value=FAKE_PDF)
    page.close = AsyncMock()
    return page


@pytest.fixture
def mock_browser(mock_page):
    browser = MagicMock(name="Browser")
    browser.new_page = AsyncMock(return_value=mock_page)
    browser.close = AsyncMock()
    return browser
