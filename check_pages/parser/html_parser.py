"""Link extraction for check_pages.

Every resource a page references is reported together with the element and
attribute it came from. ``srcset`` attributes contribute one link per image
candidate.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("TRACKED_ATTRIBUTES", "ExtractedLink", "extract_links", "parse_srcset")

TRACKED_ATTRIBUTES: Sequence[tuple[str, str]] = (
    ("a", "href"),
    ("area", "href"),
    ("audio", "src"),
    ("embed", "src"),
    ("iframe", "src"),
    ("img", "src"),
    ("img", "srcset"),
    ("input", "src"),
    ("link", "href"),
    ("object", "data"),
    ("script", "src"),
    ("source", "src"),
    ("source", "srcset"),
    ("track", "src"),
    ("video", "src"),
    ("video", "poster"),
)


@dataclass(frozen=True, slots=True)
class ExtractedLink:
    """A raw (unresolved) link and where it was found."""

    url: str
    element: str
    attribute: str


def parse_srcset(value: str) -> list[str]:
    """Return the URLs of a ``srcset`` value, dropping width/density descriptors."""
    urls: list[str] = []
    for candidate in value.split(","):
        parts = candidate.strip().split()
        if parts:
            urls.append(parts[0])
    return urls


def extract_links(html: str) -> Iterator[ExtractedLink]:
    """Yield links in attribute-pair order, then document order within a pair.

    Empty attribute values are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    for element, attribute in TRACKED_ATTRIBUTES:
        for tag in soup.find_all(element):
            if not isinstance(tag, Tag):
                continue
            value = tag.get(attribute)
            if not isinstance(value, str) or not value:
                continue
            if attribute == "srcset":
                for url in parse_srcset(value):
                    yield ExtractedLink(url, element, attribute)
            else:
                yield ExtractedLink(value, element, attribute)
