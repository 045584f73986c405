"""check_pages.headers: cache and compression header policies for page responses."""

from __future__ import annotations

import re
from typing import List, Mapping

_CACHE_DIRECTIVES = re.compile(
    r"max-age|max-stale|min-fresh|must-revalidate|no-cache|no-store|no-transform"
    r"|only-if-cached|private|proxy-revalidate|public|s-maxage"
)
_NOT_CACHED = re.compile(r"no-cache|max-age=0")
_ETAG = re.compile(r'^(W/)?"[^"]*"$')
_ENCODINGS = re.compile(r"^(deflate|gzip)$")


def check_caching(headers: Mapping[str, str]) -> List[str]:
    """Returns the caching problems of a response.

    ``Cache-Control`` must name at least one known directive. An ``ETag`` must
    be quoted (optionally ``W/``-prefixed) and is required unless the response
    is marked ``no-cache`` or ``max-age=0``.
    """
    problems: List[str] = []
    cache_control = headers.get("Cache-Control")
    if cache_control:
        if not _CACHE_DIRECTIVES.search(cache_control):
            problems.append(f"Invalid Cache-Control header in response: {cache_control}")
    else:
        problems.append("Missing Cache-Control header in response")

    etag = headers.get("ETag")
    if etag:
        if not _ETAG.match(etag):
            problems.append(f"Invalid ETag header in response: {etag}")
    elif not cache_control or not _NOT_CACHED.search(cache_control):
        problems.append("Missing ETag header in response")
    return problems


def check_compression(headers: Mapping[str, str]) -> List[str]:
    """Requires ``Content-Encoding`` to be exactly ``gzip`` or ``deflate``."""
    encoding = headers.get("Content-Encoding")
    if not encoding:
        return ["Missing Content-Encoding header in response"]
    if not _ENCODINGS.match(encoding):
        return [f"Invalid Content-Encoding header in response: {encoding}"]
    return []
