"""booklet: render a Markdown booklet to PDF."""

__version__ = "0.1.0"
