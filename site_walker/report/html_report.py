"""site_walker.report.html_report: HTML crawl report rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_walker.crawler.models import CrawlReport

TEMPLATE_NAME = "report.html.j2"
_BUILTIN_TEMPLATES = Path(__file__).parent / "templates"


def render_html(
    report: CrawlReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Render the crawl report from a template and save it to *output_path*.

    Args:
        report: CrawlReport of a finished crawl.
        output_path: path of the resulting HTML file.
        template_dir: directory holding ``report.html.j2``; the packaged
            template is used when omitted.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir else _BUILTIN_TEMPLATES
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = report.to_dict()
    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
