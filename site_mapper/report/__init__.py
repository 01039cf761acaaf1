"""site_mapper.report: sitemap renderers (text, JSON and HTML) used by the CLI and tests."""

from site_mapper.report.html_report import render_html
from site_mapper.report.json_report import render_json
from site_mapper.report.text_report import render_page, render_sitemap

__all__ = ["render_html", "render_json", "render_page", "render_sitemap"]
