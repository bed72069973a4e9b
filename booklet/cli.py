"""CLI entry point for booklet."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax

from booklet.config import BookletConfig, ConversionJob, load_config
from booklet.config.loader import DEFAULT_CONFIG_TEMPLATE
from booklet.invoker import announce_done, build_job, run
from booklet.renderer import ChromiumRenderer, RenderError

app = typer.Typer(
    name="booklet",
    help="Render a Markdown booklet to PDF with a fixed stylesheet and page border.",
)

config_app = typer.Typer(help="Manage booklet configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Diagnostics and logs go to stderr; stdout carries only the completion notice.
err_console = Console(stderr=True)

# Global state
_config_path: str | None = None
_config: BookletConfig | None = None


def _get_config() -> BookletConfig:
    """Load config on first use so `config init` still works over a broken file."""
    global _config
    if _config is None:
        try:
            _config = load_config(_config_path)
        except ValueError as e:
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        _configure_logging(_config.log_level)
    return _config


def _configure_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=_LOG_LEVELS[level],
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _convert(job: ConversionJob, cfg: BookletConfig) -> None:
    """Run one job; report failures and exit non-zero without printing Done."""
    renderer = ChromiumRenderer(cfg.browser)
    try:
        run(job, renderer, announce_done)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except RenderError as e:
        err_console.print(f"[red]Render failed:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to booklet.yaml")
    ] = None,
) -> None:
    """Convert the configured Markdown file to PDF when run without a command."""
    global _config_path, _config
    _config_path = config
    _config = None

    if ctx.invoked_subcommand is None:
        cfg = _get_config()
        _convert(cfg.job, cfg)


@app.command()
def convert(
    source: str | None = typer.Argument(None, help="Markdown file to convert"),
    destination: str | None = typer.Argument(None, help="PDF file to write"),
    css: Annotated[
        str | None, typer.Option("--css", help="Stylesheet applied to the page")
    ] = None,
    border: Annotated[
        str | None, typer.Option("--border", help="Page border, e.g. 1in or 20mm")
    ] = None,
    delay: Annotated[
        int | None, typer.Option("--delay", help="Milliseconds to wait before printing")
    ] = None,
) -> None:
    """Convert a Markdown file to PDF, overriding configured job values."""
    cfg = _get_config()
    try:
        job = build_job(
            cfg,
            source_path=source,
            destination_path=destination,
            stylesheet_path=css,
            page_border=border,
            render_delay_ms=delay,
        )
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _convert(job, cfg)


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration as YAML."""
    cfg = _get_config()
    dumped = yaml.safe_dump(cfg.model_dump(), default_flow_style=False, sort_keys=False)
    rprint(Syntax(dumped, "yaml", theme="monokai"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing booklet.yaml"),
) -> None:
    """Write a default booklet.yaml in the current directory."""
    dest = Path("booklet.yaml")
    if dest.exists() and not force:
        err_console.print(f"[yellow]{dest} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    dest.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    rprint(f"[green]Created[/green] {dest}")
