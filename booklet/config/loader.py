"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import BookletConfig

# Only these variables may be substituted into config values.
_ALLOWED_ENV_VARS: frozenset[str] = frozenset({
    "HOME",
    "BOOKLET_SOURCE",
    "BOOKLET_DESTINATION",
    "BOOKLET_STYLESHEET",
})


def load_config(cli_path: str | None = None) -> BookletConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./booklet.yaml"),
        Path.home() / ".booklet" / "config.yaml",
    ]

    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ValueError(f"Invalid config in {path}: expected a mapping")
                raw = _expand_env_vars(raw)
                return BookletConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return BookletConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings.

    Variables outside the allowlist are left untouched.
    """
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", _substitute, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def _substitute(match: re.Match) -> str:
    name = match.group(1)
    if name not in _ALLOWED_ENV_VARS:
        return match.group(0)
    return os.environ.get(name, "")


# Default YAML template for `booklet config init`
DEFAULT_CONFIG_TEMPLATE = """\
# booklet.yaml

# Conversion job
job:
  source_path: "booklet.md"
  destination_path: "booklet.pdf"
  options:
    stylesheet_path: "css/style.css"
    page_border: "1in"           # mm | cm | in | px
    render_delay_ms: 2000        # wait before the page is snapshotted
    paper_format: "A4"           # A3 | A4 | A5 | Legal | Letter | Tabloid
    paper_orientation: "portrait"  # portrait | landscape
    load_timeout_ms: 10000
    highlight_code: true

# Headless Chromium
browser:
  headless: true
  # channel: "chrome"

# Logging
log_level: "info"              # debug | info | warn | error
"""
