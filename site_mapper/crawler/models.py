# site_mapper/crawler/models.py
"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class Page:
    """One crawled page: its path plus sorted, unique links and assets."""

    path: str
    links: List[str] = field(default_factory=list)
    assets: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        from site_mapper.report.text_report import render_page

        return render_page(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "links": list(self.links), "assets": list(self.assets)}


@dataclass(slots=True)
class Sitemap:
    """Every page reached from the seed *url*, in crawl completion order."""

    url: str
    pages: List[Page] = field(default_factory=list)

    def __str__(self) -> str:
        from site_mapper.report.text_report import render_sitemap

        return render_sitemap(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "pages": [p.to_dict() for p in self.pages]}
