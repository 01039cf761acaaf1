"""site_mapper.crawler: traversal engine and its collaborators."""

from site_mapper.crawler.crawler import AsyncCrawler
from site_mapper.crawler.fetcher import Fetcher, FetchError
from site_mapper.crawler.link_extractor import scan
from site_mapper.crawler.models import Page, Sitemap
from site_mapper.crawler.visited import VisitedSet

__all__ = ["AsyncCrawler", "Fetcher", "FetchError", "Page", "Sitemap", "VisitedSet", "scan"]
