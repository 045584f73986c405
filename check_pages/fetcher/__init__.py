"""check_pages.fetcher: HTTP and local-file request backends."""

from __future__ import annotations

from typing import Union

from check_pages.fetcher.file_fetcher import FileFetcher
from check_pages.fetcher.http_fetcher import HttpFetcher, create_session, default_headers
from check_pages.fetcher.models import FetchResponse, TransportError
from check_pages.targets import is_file_url

Fetcher = Union[HttpFetcher, FileFetcher]


class Fetchers:
    """Picks the backend for a URL: ``file:`` goes to disk, everything else over HTTP."""

    def __init__(self, http: HttpFetcher, file: FileFetcher | None = None) -> None:
        self.http = http
        self.file = file or FileFetcher()

    def for_url(self, url: str) -> Fetcher:
        return self.file if is_file_url(url) else self.http


__all__ = [
    "Fetcher",
    "Fetchers",
    "FetchResponse",
    "FileFetcher",
    "HttpFetcher",
    "TransportError",
    "create_session",
    "default_headers",
]
