"""Markdown to standalone HTML, ready for the browser to print."""

from __future__ import annotations

import html
import logging
from pathlib import Path

from jinja2 import Template
from markdown_it import MarkdownIt
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

_HTML_TEMPLATE = Template(
    """<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>{{ title|e }}</title>
  {% if base_href %}<base href="{{ base_href|e }}">{% endif %}
  {% if highlight_css %}<style>
{{ highlight_css }}
  </style>{% endif %}
  <style>
{{ stylesheet }}
  </style>
</head>
<body>
{{ body }}
</body>
</html>
"""
)


def base_href_for(source: Path) -> str:
    """file:// URI of the source's directory, so relative images and links resolve."""
    return source.resolve().parent.as_uri() + "/"


class MarkdownHtmlBuilder:
    """Renders Markdown through markdown-it-py and wraps it in an HTML page.

    Fenced code blocks with a known language are highlighted by pygments;
    unknown languages fall back to escaped plain text.
    """

    def __init__(self, *, highlight_code: bool = True) -> None:
        self.highlight_code = highlight_code
        self._formatter = HtmlFormatter(cssclass="highlight")
        self._md = self._build_parser()

    def _build_parser(self) -> MarkdownIt:
        md = MarkdownIt("commonmark", {"html": True, "typographer": True})
        md.enable(["table", "strikethrough", "replacements", "smartquotes"])
        md.use(footnote_plugin)
        md.use(deflist_plugin)
        md.use(tasklists_plugin)
        if self.highlight_code:
            md.renderer.rules["fence"] = self._render_fence
        return md

    def _render_fence(self, tokens, idx, options, env) -> str:
        token = tokens[idx]
        lang = token.info.strip().split()[0] if token.info.strip() else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang)
            except ClassNotFound:
                logger.debug("no pygments lexer for %r, leaving block plain", lang)
            else:
                return highlight(token.content, lexer, self._formatter)
        return f"<pre><code>{html.escape(token.content)}</code></pre>\n"

    def render_body(self, markdown_text: str) -> str:
        return self._md.render(markdown_text)

    def build(
        self,
        markdown_text: str,
        stylesheet_css: str = "",
        *,
        base_href: str | None = None,
        title: str = "Document",
    ) -> str:
        """Return a complete HTML document for the given Markdown."""
        highlight_css = (
            self._formatter.get_style_defs(".highlight") if self.highlight_code else ""
        )
        return _HTML_TEMPLATE.render(
            title=title,
            base_href=base_href,
            highlight_css=highlight_css,
            stylesheet=stylesheet_css,
            body=self.render_body(markdown_text),
        )
