"""Conversion invoker: submit one job to a renderer, then notify once."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from rich import print as rprint

from booklet.config.models import BookletConfig, ConversionJob, RenderOptions
from booklet.renderer.base import DocumentRenderer
from booklet.renderer.models import RenderResult

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[RenderResult], None]


def build_job(config: BookletConfig, **overrides: object) -> ConversionJob:
    """Build the job from config, applying any non-None top-level or option overrides."""
    job = config.job
    option_fields = set(RenderOptions.model_fields)
    option_updates = {
        k: v for k, v in overrides.items() if k in option_fields and v is not None
    }
    job_updates = {
        k: v for k, v in overrides.items() if k not in option_fields and v is not None
    }
    unknown = set(job_updates) - set(ConversionJob.model_fields)
    if unknown:
        raise ValueError(f"Unknown job fields: {', '.join(sorted(unknown))}")

    if not option_updates and not job_updates:
        return job
    data = job.model_dump()
    data["options"].update(option_updates)
    data.update(job_updates)
    # Re-validate so overrides get the same checks as config values.
    return ConversionJob.model_validate(data)


def announce_done(result: RenderResult) -> None:
    """Default completion callback."""
    rprint("Done")


async def submit(
    job: ConversionJob,
    renderer: DocumentRenderer,
    on_complete: CompletionCallback = announce_done,
) -> RenderResult:
    """Hand the job to the renderer once and fire on_complete once it succeeds.

    Renderer failures propagate untouched and on_complete is not called.
    """
    logger.debug("submitting %s -> %s", job.source_path, job.destination_path)
    result = await renderer.render(job)
    on_complete(result)
    return result


def run(
    job: ConversionJob,
    renderer: DocumentRenderer,
    on_complete: CompletionCallback = announce_done,
) -> RenderResult:
    """Blocking wrapper around submit() for synchronous callers."""

    async def _run() -> RenderResult:
        async with renderer:
            return await submit(job, renderer, on_complete)

    return asyncio.run(_run())
