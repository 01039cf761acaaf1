# site_mapper/__init__.py
"""
SiteMapper package initializer.
Defines the package version and exposes the crawl entry point.
"""
__version__ = "0.1.0"

from site_mapper.crawler.models import Page, Sitemap
from site_mapper.engine import CrawlError, crawl

__all__ = ["__version__", "CrawlError", "Page", "Sitemap", "crawl"]
