"""Headless Chromium renderer driven by Playwright."""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from booklet.config.models import BrowserConfig, ConversionJob, RenderOptions
from booklet.renderer.base import DocumentRenderer
from booklet.renderer.markdown import MarkdownHtmlBuilder, base_href_for
from booklet.renderer.models import RenderError, RenderResult

logger = logging.getLogger(__name__)


def check_preconditions(job: ConversionJob) -> tuple[Path, Path, Path]:
    """Resolve the job's paths, raising FileNotFoundError if any is unusable.

    Returns (source, stylesheet, destination).
    """
    source = Path(job.source_path)
    if not source.is_file():
        raise FileNotFoundError(f"Markdown source not found: {source}")

    stylesheet = Path(job.options.stylesheet_path)
    if not stylesheet.is_file():
        raise FileNotFoundError(f"Stylesheet not found: {stylesheet}")

    destination = Path(job.destination_path)
    if not destination.resolve().parent.is_dir():
        raise FileNotFoundError(
            f"Destination directory does not exist: {destination.resolve().parent}"
        )
    return source, stylesheet, destination


def pdf_kwargs(options: RenderOptions) -> dict:
    """Translate render options into keyword arguments for ``Page.pdf``."""
    border = options.page_border
    return {
        "format": options.paper_format,
        "landscape": options.paper_orientation == "landscape",
        "margin": {"top": border, "right": border, "bottom": border, "left": border},
        "print_background": True,
    }


class ChromiumRenderer(DocumentRenderer):
    """Prints Markdown to PDF through a headless Chromium page.

    Use as an async context manager so the browser is always closed:

        async with ChromiumRenderer() as renderer:
            await renderer.render(job)
    """

    name = "chromium"

    def __init__(self, config: BrowserConfig | None = None) -> None:
        self.config = config or BrowserConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> ChromiumRenderer:
        # The browser is launched by render(), after the job's files are checked.
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:
        if self._browser is not None:
            return
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                channel=self.config.channel,
            )
        except PlaywrightError as e:
            await self.close()
            raise RenderError(self.name, "launch", e) from e
        logger.debug("chromium started (headless=%s)", self.config.headless)

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def render(self, job: ConversionJob) -> RenderResult:
        source, stylesheet, destination = check_preconditions(job)
        options = job.options
        started = time.monotonic()

        markdown_text = source.read_text(encoding="utf-8")
        stylesheet_css = stylesheet.read_text(encoding="utf-8")
        builder = MarkdownHtmlBuilder(highlight_code=options.highlight_code)
        html_doc = builder.build(
            markdown_text,
            stylesheet_css,
            base_href=base_href_for(source),
            title=source.stem,
        )

        await self.start()
        pdf_bytes = await self._print(html_doc, options)

        destination.write_bytes(pdf_bytes)
        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.info("wrote %s (%d bytes)", destination, len(pdf_bytes))
        return RenderResult(
            source_path=str(source),
            destination_path=str(destination),
            size_bytes=len(pdf_bytes),
            elapsed_ms=elapsed_ms,
        )

    # ------------------------------------------------------------------
    # Browser internals
    # ------------------------------------------------------------------

    async def _print(self, html_doc: str, options: RenderOptions) -> bytes:
        assert self._browser is not None
        # Loaded from a file:// URL so the <base> can reach local assets.
        with tempfile.TemporaryDirectory(prefix="booklet_") as tmp:
            html_path = Path(tmp) / "index.html"
            html_path.write_text(html_doc, encoding="utf-8")

            page = await self._browser.new_page()
            try:
                try:
                    await page.goto(
                        html_path.as_uri(),
                        wait_until="load",
                        timeout=options.load_timeout_ms,
                    )
                except PlaywrightError as e:
                    raise RenderError(self.name, "load", e) from e

                await page.emulate_media(media="print")
                if options.render_delay_ms > 0:
                    logger.debug("waiting %d ms before snapshot", options.render_delay_ms)
                    await page.wait_for_timeout(options.render_delay_ms)

                try:
                    return await page.pdf(**pdf_kwargs(options))
                except PlaywrightError as e:
                    raise RenderError(self.name, "print", e) from e
            finally:
                await page.close()
