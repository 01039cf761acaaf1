"""site_mapper.report.html_report: HTML sitemap report rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, PackageLoader, select_autoescape

from site_mapper.crawler.models import Sitemap

TEMPLATE_NAME = "sitemap.html.j2"


def _environment(template_dir: Optional[Union[Path, str]]) -> Environment:
    if template_dir is None:
        loader = PackageLoader("site_mapper", "templates")
    else:
        loader = FileSystemLoader(str(template_dir))
    return Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "j2"]))


def render_html(
    sitemap: Sitemap,
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Render the HTML report from a template and save it.

    Args:
        sitemap: the crawl result.
        template_dir: directory holding ``sitemap.html.j2``; None uses the
            template shipped with the package.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = _environment(template_dir).get_template(TEMPLATE_NAME)
    context: dict[str, Any] = {
        "url": sitemap.url,
        "pages": sitemap.pages,
        "asset_count": len({a for p in sitemap.pages for a in p.assets}),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
