"""check_pages.targets: classification, resolution and identity of checked URLs."""

from __future__ import annotations

import ipaddress
import posixpath
from typing import Optional, Sequence
from urllib.parse import unquote, urljoin, urlsplit

__all__: Sequence[str] = (
    "CHECKED_SCHEMES",
    "normalize_page_url",
    "is_file_url",
    "file_path",
    "split_fragment",
    "dedup_key",
    "has_empty_fragment",
    "resolve_link",
    "hostname",
    "is_checked_scheme",
    "is_local_host",
)

CHECKED_SCHEMES = ("http", "https", "file")


def normalize_page_url(url: str) -> str:
    """Adds an explicit ``file:`` scheme to a page URL that has none."""
    if not urlsplit(url).scheme:
        return "file:" + url
    return url


def is_file_url(url: str) -> bool:
    return urlsplit(url).scheme == "file"


def file_path(url: str) -> str:
    """Returns the (unquoted) filesystem path of a ``file:`` URL."""
    parsed = urlsplit(url)
    if parsed.scheme != "file":
        raise ValueError(f"URI does not use the 'file:' protocol: {url}")
    return unquote(parsed.path)


def split_fragment(url: str) -> tuple[str, Optional[str]]:
    """Splits *url* at the first ``#``; the fragment is None when absent, ``""`` when empty."""
    base, sep, fragment = url.partition("#")
    return base, (fragment if sep else None)


def dedup_key(url: str) -> str:
    """Identity used for at-most-once testing: the URL without its fragment."""
    return split_fragment(url)[0]


def has_empty_fragment(url: str) -> bool:
    return split_fragment(url)[1] == ""


def _resolve_file(base: str, link: str) -> str:
    # urljoin() turns relative file paths into absolute ones, so join by hand.
    base_path = urlsplit(base).path
    parsed = urlsplit(link)
    if not parsed.path:
        path = base_path
        query = parsed.query if parsed.query else urlsplit(base).query
    elif parsed.path.startswith("/"):
        path, query = parsed.path, parsed.query
    else:
        path = posixpath.normpath(posixpath.join(posixpath.dirname(base_path), parsed.path))
        query = parsed.query
    return "file:" + path + (f"?{query}" if query else "")


def resolve_link(base: str, link: str) -> str:
    """Resolves *link* against the page URL *base*.

    An empty fragment (``page#``) survives resolution so that it can still be
    reported.
    """
    reference, fragment = split_fragment(link.strip())
    if is_file_url(base) and not urlsplit(reference).scheme and not reference.startswith("//"):
        resolved = _resolve_file(dedup_key(base), reference)
    else:
        resolved = urljoin(dedup_key(base), reference) if reference else dedup_key(base)
    if fragment is not None:
        resolved += "#" + fragment
    return resolved


def hostname(url: str) -> Optional[str]:
    """Lower-cased host of *url*; None when there is none or the authority is malformed."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def is_checked_scheme(url: str) -> bool:
    return urlsplit(url).scheme in CHECKED_SCHEMES


def is_local_host(host: Optional[str]) -> bool:
    """True for ``localhost``, any address in 127.0.0.0/8 and any spelling of ``::1``."""
    if not host:
        return False
    host = host.strip("[]").lower()
    if host == "localhost":
        return True
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    if isinstance(address, ipaddress.IPv4Address):
        return address in ipaddress.IPv4Network("127.0.0.0/8")
    return address == ipaddress.IPv6Address("::1")
