import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LENGTH_RE = re.compile(r"^(\d+(\.\d+)?|\.\d+)(mm|cm|in|px)$")

PaperFormat = Literal["A3", "A4", "A5", "Legal", "Letter", "Tabloid"]


class RenderOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    stylesheet_path: str = "css/style.css"
    page_border: str = "1in"
    # Gives web fonts and other async content time to settle before the snapshot.
    render_delay_ms: int = Field(default=2000, ge=0)
    paper_format: PaperFormat = "A4"
    paper_orientation: Literal["portrait", "landscape"] = "portrait"
    load_timeout_ms: int = Field(default=10000, gt=0)
    highlight_code: bool = True

    @field_validator("page_border")
    @classmethod
    def validate_page_border(cls, v: str) -> str:
        v = v.strip()
        if not _LENGTH_RE.match(v):
            raise ValueError(
                f"page_border must be a length with a unit (mm, cm, in, px), got {v!r}"
            )
        return v


class ConversionJob(BaseModel):
    """One Markdown file to one PDF file. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    source_path: str = Field(default="booklet.md", min_length=1)
    destination_path: str = Field(default="booklet.pdf", min_length=1)
    options: RenderOptions = Field(default_factory=RenderOptions)


class BrowserConfig(BaseModel):
    headless: bool = True
    channel: str | None = None


class BookletConfig(BaseModel):
    job: ConversionJob = Field(default_factory=ConversionJob)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
