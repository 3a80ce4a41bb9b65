"""Open Library lookup and result pagination."""

import logging
import math
import re
from dataclasses import dataclass
from typing import List, Optional

import requests

from .errors import UpstreamUnavailable

log = logging.getLogger(__name__)

ISBN_PATTERN = re.compile(r"^\d{10,13}$")
UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"


@dataclass
class CatalogResult:
    title: str
    author: str
    cover_url: str
    isbn: Optional[str] = None


@dataclass
class Page:
    items: List[CatalogResult]
    page: int
    total_pages: int
    total: int

    @property
    def has_previous(self):
        return self.page > 0

    @property
    def has_next(self):
        return self.page + 1 < self.total_pages


class CatalogClient:
    def __init__(
        self,
        search_url="https://openlibrary.org/search.json",
        cover_url="https://covers.openlibrary.org/b",
        timeout=5.0,
    ):
        self.search_url = search_url
        self.cover_url = cover_url.rstrip("/")
        self.timeout = timeout

    def isbn_cover(self, isbn):
        return f"{self.cover_url}/isbn/{isbn}-M.jpg"

    def id_cover(self, cover_id):
        return f"{self.cover_url}/id/{cover_id}-M.jpg"

    def search(self, title=None, author=None):
        """Return every cover-bearing match for ``title``/``author``.

        A bare 10 to 13 digit query is taken as an ISBN and answered locally.
        Upstream failures are logged and yield an empty list.
        """
        title = (title or "").strip()
        author = (author or "").strip()
        query = " ".join(part for part in (title, author) if part)
        if not query:
            return []

        if ISBN_PATTERN.match(query):
            return [
                CatalogResult(
                    title=f"Book with ISBN {query}",
                    author=UNKNOWN_AUTHOR,
                    cover_url=self.isbn_cover(query),
                    isbn=query,
                )
            ]

        params = {}
        if title:
            params["title"] = title
        if author:
            params["author"] = author

        try:
            docs = self._fetch_docs(params)
        except UpstreamUnavailable as exc:
            log.warning("Open Library search failed for %s: %s", params, exc)
            return []

        results = []
        for doc in docs:
            if not isinstance(doc, dict) or not doc.get("cover_i"):
                continue
            results.append(self._to_result(doc))
        return results

    def _fetch_docs(self, params):
        try:
            r = requests.get(self.search_url, params=params, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as exc:
            raise UpstreamUnavailable(str(exc)) from exc
        except ValueError as exc:
            raise UpstreamUnavailable(f"malformed body: {exc}") from exc

        if not isinstance(data, dict):
            raise UpstreamUnavailable("response body is not an object")
        docs = data.get("docs", [])
        if not isinstance(docs, list):
            raise UpstreamUnavailable("'docs' is not a list")
        return docs

    def _to_result(self, doc):
        authors = doc.get("author_name") or []
        if isinstance(authors, str):
            authors = [authors]
        isbns = doc.get("isbn") or []
        if isinstance(isbns, str):
            isbns = [isbns]
        return CatalogResult(
            title=doc.get("title") or UNKNOWN_TITLE,
            author=", ".join(authors) or UNKNOWN_AUTHOR,
            cover_url=self.id_cover(doc["cover_i"]),
            isbn=isbns[0] if isbns else None,
        )


def paginate(results, page=0, page_size=20):
    """Slice ``results`` into the 0-based ``page`` of ``page_size`` items.

    Out-of-range pages are clamped to the nearest valid one.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    total = len(results)
    total_pages = math.ceil(total / page_size)
    page = max(0, min(page, total_pages - 1)) if total_pages else 0
    start = page * page_size
    return Page(
        items=list(results[start:start + page_size]),
        page=page,
        total_pages=total_pages,
        total=total,
    )
