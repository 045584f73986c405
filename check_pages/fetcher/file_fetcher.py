# check_pages/fetcher/file_fetcher.py
"""
Local-file fetcher: answers ``file:`` URLs the same way the HTTP fetcher
answers http(s) ones (status 200, no headers, no redirects).
"""
from __future__ import annotations

import errno
from contextlib import asynccontextmanager
from typing import AsyncIterator, BinaryIO, Final

from multidict import CIMultiDict, CIMultiDictProxy

from check_pages.fetcher.models import FetchResponse, TransportError
from check_pages.targets import file_path

_CHUNK_SIZE: Final[int] = 64 * 1024


async def _read_chunks(handle: BinaryIO) -> AsyncIterator[bytes]:
    while chunk := handle.read(_CHUNK_SIZE):
        yield chunk


def _describe(exc: OSError, path: str) -> str:
    code = errno.errorcode.get(exc.errno, "EIO") if exc.errno else "EIO"
    reason = (exc.strerror or str(exc)).lower()
    return f"{code}: {reason}, open '{path}'"


class FileFetcher:
    """Reads ``file:`` targets from disk."""

    @asynccontextmanager
    async def open(
        self, url: str, *, method: str = "GET", follow_redirects: bool = True
    ) -> AsyncIterator[FetchResponse]:
        path = file_path(url)
        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise TransportError(_describe(exc, path)) from exc
        try:
            yield FetchResponse(
                url=url,
                status=200,
                headers=CIMultiDictProxy(CIMultiDict()),
                chunks=_read_chunks(handle),
            )
        except OSError as exc:
            raise TransportError(_describe(exc, path)) from exc
        finally:
            handle.close()

    def probe(self, url: str, *, follow_redirects: bool = True):
        return self.open(url, method="HEAD", follow_redirects=follow_redirects)

    def fetch(self, url: str, *, follow_redirects: bool = True):
        return self.open(url, method="GET", follow_redirects=follow_redirects)
