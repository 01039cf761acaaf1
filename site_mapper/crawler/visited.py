# site_mapper/crawler/visited.py
"""
Registry of request URIs already claimed by a crawl.
"""
from __future__ import annotations

import threading
from typing import Optional, Set


class VisitedSet:
    """Claim-once set shared by every branch of a single crawl.

    ``limit`` caps how many identifiers may ever be claimed; once reached,
    every further claim fails.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("limit must be >= 1")
        self._limit = limit
        self._claimed: Set[str] = set()
        self._lock = threading.Lock()

    def try_claim(self, identifier: str) -> bool:
        """Record *identifier* and return True, or return False if it is taken."""
        with self._lock:
            if identifier in self._claimed:
                return False
            if self._limit is not None and len(self._claimed) >= self._limit:
                return False
            self._claimed.add(identifier)
            return True

    @property
    def exhausted(self) -> bool:
        with self._lock:
            return self._limit is not None and len(self._claimed) >= self._limit

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._claimed

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)
