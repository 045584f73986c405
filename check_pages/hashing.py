"""check_pages.hashing: expected content hashes taken from a link's query string.

A link such as ``archive.zip?sha1=9511fa1a...`` declares the digest its body
must have. Supported algorithms, in order of precedence: ``sha1``, ``md5``,
``crc32``.
"""

from __future__ import annotations

import hashlib
import zlib
from dataclasses import dataclass
from typing import AsyncIterable, Optional, Protocol, Sequence
from urllib.parse import parse_qs, urlsplit

__all__: Sequence[str] = ("ALGORITHMS", "ExpectedHash", "Crc32", "new_digest", "digest_stream")

ALGORITHMS = ("sha1", "md5", "crc32")


class _Digest(Protocol):
    def update(self, data: bytes) -> None: ...

    def hexdigest(self) -> str: ...


class Crc32:
    """Incremental CRC32 with the hashlib ``update``/``hexdigest`` interface."""

    def __init__(self) -> None:
        self._value = 0

    def update(self, data: bytes) -> None:
        self._value = zlib.crc32(data, self._value)

    def hexdigest(self) -> str:
        return f"{self._value & 0xFFFFFFFF:08x}"


def new_digest(algorithm: str) -> _Digest:
    if algorithm == "crc32":
        return Crc32()
    if algorithm in ("sha1", "md5"):
        return hashlib.new(algorithm)
    raise ValueError(f"Unsupported hash algorithm: {algorithm}")


async def digest_stream(algorithm: str, chunks: AsyncIterable[bytes]) -> str:
    """Hashes a byte stream incrementally and returns the lowercase hex digest."""
    digest = new_digest(algorithm)
    async for chunk in chunks:
        digest.update(chunk)
    return digest.hexdigest().lower()


@dataclass(frozen=True, slots=True)
class ExpectedHash:
    algorithm: str
    value: str

    @classmethod
    def from_url(cls, url: str) -> Optional[ExpectedHash]:
        query = parse_qs(urlsplit(url).query)
        for algorithm in ALGORITHMS:
            values = query.get(algorithm)
            if values and values[0]:
                return cls(algorithm, values[0])
        return None

    def matches(self, actual: str) -> bool:
        return self.value.upper() == actual.upper()
