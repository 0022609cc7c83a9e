"""site_walker.report: JSON and HTML crawl reports used by the CLI and tests."""

from __future__ import annotations

from .html_report import render_html
from .json_report import render_json

__all__ = ["render_json", "render_html"]
