# File: site_mapper/utils.py
"""site_mapper.utils: URL helpers shared by the scanner, the crawler and the CLI."""

from __future__ import annotations

from typing import Final, Sequence
from urllib.parse import quote, unquote, urljoin, urlsplit

__all__: Sequence[str] = (
    "request_uri",
    "resolve_url",
    "extract_host",
    "url_path",
    "build_seed_url",
)

# RFC 3986 pchar plus "/"; "%" keeps escapes that are already there
_PATH_SAFE: Final[str] = "/%:@!$&'()*+,;=-._~"


def request_uri(url: str) -> str:
    """Return the escaped path plus query of *url*, fragment dropped.

    ``/café`` and ``/caf%C3%A9`` give the same result. An empty path
    becomes ``/``; the query is kept as written.
    """
    parts = urlsplit(url)
    uri = quote(parts.path, safe=_PATH_SAFE) or "/"
    if parts.query:
        uri = f"{uri}?{parts.query}"
    return uri


def resolve_url(base: str, ref: str) -> str:
    """Resolve *ref* against *base*. Raises ValueError on unparsable input."""
    resolved = urljoin(base, ref.strip())
    # urljoin accepts bad ports silently; reading .port raises
    urlsplit(resolved).port
    return resolved


def extract_host(url: str) -> str:
    """Host and explicit port of *url*, without userinfo."""
    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    return host


def url_path(url: str) -> str:
    """Decoded path component, no query or fragment."""
    return unquote(urlsplit(url).path)


def build_seed_url(domain: str) -> str:
    """Seed URL for crawling *domain*: ``http://<domain>/``."""
    return f"http://{domain.strip()}/"
