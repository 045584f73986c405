# check_pages/fetcher/http_fetcher.py
"""
HTTP fetcher: HEAD probes and full GET requests over a shared aiohttp session,
with optional retry/backoff for transport errors.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Final, Optional

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from check_pages.fetcher.models import FetchResponse, TransportError
from check_pages.logger import logger

_CHUNK_SIZE: Final[int] = 64 * 1024


def default_headers(user_agent: Optional[str]) -> dict[str, str]:
    """Request headers sent with every request; caching is disabled so timings stay accurate."""
    headers = {
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }
    if user_agent:
        headers["User-Agent"] = user_agent
    return headers


def create_session(user_agent: Optional[str], timeout: float) -> ClientSession:
    """Builds the session used for every networked check of a run."""
    return ClientSession(
        timeout=ClientTimeout(total=timeout),
        headers=default_headers(user_agent),
        # without this aiohttp adds its own User-Agent when ours is disabled
        skip_auto_headers=() if user_agent else ("User-Agent",),
        raise_for_status=False,
    )


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class HttpFetcher:
    """Issues probe (HEAD) and full (GET) requests for http(s) targets."""

    def __init__(self, session: ClientSession, retry_times: int = 0) -> None:
        self.session = session
        self.retry_times = retry_times

    async def _send(self, url: str, method: str, follow_redirects: bool) -> ClientResponse:
        attempts = 0
        while True:
            try:
                return await self.session.request(method, url, allow_redirects=follow_redirects)
            except (ClientError, asyncio.TimeoutError) as exc:
                attempts += 1
                if attempts > self.retry_times:
                    raise TransportError(_describe(exc)) from exc
                # exponential backoff, cap at 60s
                backoff = min(2**attempts, 60)
                logger.debug("Retry %d/%d for %s after %d s: %s", attempts, self.retry_times, url, backoff, exc)
                await asyncio.sleep(backoff)

    @asynccontextmanager
    async def open(
        self, url: str, *, method: str = "GET", follow_redirects: bool = True
    ) -> AsyncIterator[FetchResponse]:
        resp = await self._send(url, method, follow_redirects)
        try:
            yield FetchResponse(
                url=str(resp.url),
                status=resp.status,
                headers=resp.headers,
                chunks=resp.content.iter_chunked(_CHUNK_SIZE),
                redirected=bool(resp.history),
                charset=resp.charset,
            )
        except (ClientError, asyncio.TimeoutError) as exc:
            # the body stream broke after the headers arrived
            raise TransportError(_describe(exc)) from exc
        finally:
            resp.release()

    def probe(self, url: str, *, follow_redirects: bool = True):
        """Lightweight existence check, no body transfer."""
        return self.open(url, method="HEAD", follow_redirects=follow_redirects)

    def fetch(self, url: str, *, follow_redirects: bool = True):
        """Full request; the body is available through the response chunks."""
        return self.open(url, method="GET", follow_redirects=follow_redirects)
