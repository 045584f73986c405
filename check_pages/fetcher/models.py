"""
Data models shared by the HTTP and local-file fetchers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterator, Mapping, Optional


class TransportError(Exception):
    """A request failed before a response was available (DNS, refused, timeout, ENOENT...)."""


@dataclass(slots=True)
class FetchResponse:
    """Status, headers and body stream of one request (HTTP or ``file:``)."""

    url: str
    status: int
    headers: Mapping[str, str]
    chunks: AsyncIterator[bytes]
    redirected: bool = False
    charset: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status < 400

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        async for chunk in self.chunks:
            yield chunk

    async def read(self) -> bytes:
        return b"".join([chunk async for chunk in self.chunks])

    def decode(self, body: bytes) -> str:
        try:
            return body.decode(self.charset or "utf-8", errors="replace")
        except LookupError:
            # unknown charset in Content-Type
            return body.decode("utf-8", errors="replace")
