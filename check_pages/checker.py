# === FILE: check_pages/checker.py ===
"""
Verification queue: page checks, link checks and the worklist that orders them.

Work items are processed strictly one at a time. A page's links are inserted
at the front of the worklist, so they all finish before the next page is
fetched.
"""
from __future__ import annotations

import enum
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Set, Union

from check_pages.config import RunConfiguration
from check_pages.fetcher import Fetchers, TransportError
from check_pages.hashing import ExpectedHash, digest_stream
from check_pages.headers import check_caching, check_compression
from check_pages.issues import CheckResult, IssueCollector
from check_pages.logger import Host, logger, validate_host
from check_pages.parser.html_parser import extract_links
from check_pages.parser.xhtml_parser import validate_xhtml
from check_pages.targets import (
    dedup_key,
    has_empty_fragment,
    hostname,
    is_checked_scheme,
    is_local_host,
    resolve_link,
)

__all__ = ("LinkState", "PageCheck", "LinkCheck", "RunContext", "VerificationQueue")


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class LinkState(enum.Enum):
    PROBE = "probe"
    FULL = "full"
    PASS = "pass"
    FAIL = "fail"


@dataclass(slots=True)
class PageCheck:
    """A page to fetch; ``url`` becomes the final URL after a redirect."""

    url: str


@dataclass(slots=True)
class LinkCheck:
    """A link found on ``page`` (the page's post-redirect URL)."""

    url: str
    page: str
    retry: bool = False
    state: LinkState = LinkState.PROBE
    expected_hash: Optional[ExpectedHash] = None


WorkItem = Union[PageCheck, LinkCheck]


@dataclass(slots=True)
class RunContext:
    """State shared by all checks of one run: the issue log and the dedup set."""

    config: RunConfiguration
    host: Host
    fetchers: Fetchers
    collector: IssueCollector
    tested: Set[str] = field(default_factory=set)

    def log(self, message: str) -> None:
        self.host.log(message)

    def issue(self, page: str, message: str) -> None:
        self.collector.add(page, message)

    def claim(self, url: str) -> bool:
        """Adds the fragment-less URL to the dedup set; False if it was already there."""
        key = dedup_key(url)
        if key in self.tested:
            return False
        self.tested.add(key)
        return True


class VerificationQueue:
    """Single-consumer worklist of page and link checks."""

    def __init__(self, config: RunConfiguration, host: Host, fetchers: Fetchers) -> None:
        validate_host(host)
        self.config = config
        self.context = RunContext(
            config=config,
            host=host,
            fetchers=fetchers,
            collector=IssueCollector(host),
        )
        self._pending: Deque[WorkItem] = deque(PageCheck(url) for url in config.page_urls)

    async def run(self) -> CheckResult:
        """Drains the worklist and returns the aggregated result."""
        logger.debug("Queued %d pages", len(self._pending))
        while self._pending:
            item = self._pending.popleft()
            if isinstance(item, PageCheck):
                await self._check_page(item)
            else:
                await self._check_link(item)
        return self.context.collector.finish(self.config.summary)

    # ------------------------------------------------------------------ #
    # Page checks                                                         #
    # ------------------------------------------------------------------ #

    async def _check_page(self, item: PageCheck) -> None:
        ctx = self.context
        cfg = self.config
        page = item.url
        start = time.monotonic()
        try:
            async with ctx.fetchers.for_url(page).fetch(page) as resp:
                body = await resp.read()
        except TransportError as exc:
            ctx.issue(page, f"Page error ({exc}): {page} ({_elapsed_ms(start)}ms)")
            return
        elapsed = _elapsed_ms(start)

        if not resp.ok:
            ctx.issue(page, f"Bad page ({resp.status}): {page} ({elapsed}ms)")
            return

        if resp.redirected and resp.url != page:
            ctx.log(f"Page: {page} -> {resp.url} ({elapsed}ms)")
            item.url = page = resp.url
        else:
            ctx.log(f"Page: {page} ({elapsed}ms)")

        if cfg.check_links:
            self._schedule_links(page, resp.decode(body))

        if cfg.check_xhtml:
            for message in validate_xhtml(body):
                ctx.issue(page, message)

        if cfg.max_response_time and cfg.max_response_time < elapsed:
            ctx.issue(page, f"Page response took more than {cfg.max_response_time:g}ms to complete")

        if cfg.check_caching:
            for message in check_caching(resp.headers):
                ctx.issue(page, message)

        if cfg.check_compression:
            for message in check_compression(resp.headers):
                ctx.issue(page, message)

    def _schedule_links(self, page: str, html: str) -> None:
        cfg = self.config
        page_host = hostname(page)
        checks: List[LinkCheck] = []
        for extracted in extract_links(html):
            try:
                link = resolve_link(page, extracted.url)
                if not is_checked_scheme(link):
                    continue
                if cfg.only_same_domain and hostname(link) != page_host:
                    continue
            except ValueError as exc:
                # malformed authority, e.g. an unterminated IPv6 literal
                self.context.issue(page, f"Link error ({exc}): {extracted.url}")
                continue
            if link in cfg.links_to_ignore:
                continue
            checks.append(LinkCheck(url=link, page=page))
        # front of the queue, in document order, ahead of the remaining pages
        self._pending.extendleft(reversed(checks))
        logger.debug("Scheduled %d links for %s", len(checks), page)

    # ------------------------------------------------------------------ #
    # Link checks                                                         #
    # ------------------------------------------------------------------ #

    async def _check_link(self, item: LinkCheck) -> None:
        ctx = self.context
        cfg = self.config
        link, page = item.url, item.page

        if cfg.no_empty_fragments and has_empty_fragment(link):
            ctx.issue(page, f"Empty fragment: {link}")
        if not ctx.claim(link):
            ctx.log(f"Visited link: {link}")
            return

        if cfg.query_hashes:
            # the body is needed for hashing, so skip the HEAD probe
            item.expected_hash = ExpectedHash.from_url(link)
            item.state = LinkState.FULL
        if cfg.no_local_links and is_local_host(hostname(link)):
            ctx.issue(page, f"Local link: {link}")

        fetcher = ctx.fetchers.for_url(link)
        follow = not cfg.no_redirects
        start = time.monotonic()
        while item.state in (LinkState.PROBE, LinkState.FULL):
            probing = item.state is LinkState.PROBE
            request = fetcher.probe(link, follow_redirects=follow) if probing else fetcher.fetch(
                link, follow_redirects=follow
            )
            actual_hash: Optional[str] = None
            try:
                async with request as resp:
                    status = resp.status
                    redirect = resp.is_redirect
                    location = resp.headers.get("Location")
                    if resp.ok and item.expected_hash is not None:
                        actual_hash = await digest_stream(item.expected_hash.algorithm, resp.iter_chunks())
            except TransportError as exc:
                item.state = LinkState.FAIL
                ctx.issue(page, f"Link error ({exc}): {link} ({_elapsed_ms(start)}ms)")
                return
            elapsed = _elapsed_ms(start)

            if 200 <= status < 300:
                item.state = LinkState.PASS
                ctx.log(f"Link: {link} ({elapsed}ms)")
                if item.expected_hash is not None and actual_hash is not None:
                    if item.expected_hash.matches(actual_hash):
                        ctx.log(f"Hash: {link}")
                    else:
                        ctx.issue(page, f"Hash error ({actual_hash.lower()}): {link}")
            elif probing:
                # some origins reject HEAD for resources that exist
                logger.debug("Probe of %s returned %d, retrying with GET", link, status)
                item.retry = True
                item.state = LinkState.FULL
            else:
                item.state = LinkState.FAIL
                if redirect and cfg.no_redirects:
                    target = location or "[Missing Location header]"
                    ctx.issue(page, f"Redirected link ({status}): {link} -> {target} ({elapsed}ms)")
                else:
                    ctx.issue(page, f"Bad link ({status}): {link} ({elapsed}ms)")
