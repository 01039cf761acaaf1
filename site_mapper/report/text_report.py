# site_mapper/report/text_report.py
"""
Plain-text rendering of a sitemap, as printed by the CLI.

The format is fixed::

    Site map for http://example.com/
    Path: 
    	/
    	Links:
    		/foo
    	Assets:
    		/a.css

Links and assets are written in the order the page holds them.
"""
from __future__ import annotations

from io import StringIO

from site_mapper.crawler.models import Page, Sitemap


def render_page(page: Page) -> str:
    """Return the ``Path:`` block of one page."""
    buf = StringIO()
    buf.write(f"Path: \n\t{page.path}\n\tLinks:\n")
    for link in page.links:
        buf.write(f"\t\t{link}\n")
    buf.write("\tAssets:\n")
    for asset in page.assets:
        buf.write(f"\t\t{asset}\n")
    return buf.getvalue()


def render_sitemap(sitemap: Sitemap) -> str:
    """Return the header line followed by every page block."""
    return f"Site map for {sitemap.url}\n" + "".join(render_page(p) for p in sitemap.pages)
