# File: tests/test_headers.py
import pytest
from multidict import CIMultiDict

from check_pages.headers import check_caching, check_compression


@pytest.mark.parametrize(
    "headers,expected",
    [
        ({"Cache-Control": "no-cache"}, []),
        ({"Cache-Control": "public, max-age=0"}, []),
        ({"Cache-Control": "public", "ETag": '"abc"'}, []),
        ({"Cache-Control": "private", "ETag": 'W/"abc"'}, []),
        ({}, ["Missing Cache-Control header in response", "Missing ETag header in response"]),
        ({"ETag": '"abc"'}, ["Missing Cache-Control header in response"]),
        (
            {"Cache-Control": "invalid", "ETag": '"abc"'},
            ["Invalid Cache-Control header in response: invalid"],
        ),
        ({"Cache-Control": "public"}, ["Missing ETag header in response"]),
        (
            {"Cache-Control": "no-cache", "ETag": "abc"},
            ["Invalid ETag header in response: abc"],
        ),
        (
            {"Cache-Control": "no-cache", "ETag": 'w/"abc"'},
            ['Invalid ETag header in response: w/"abc"'],
        ),
    ],
)
def test_check_caching(headers, expected):
    assert check_caching(CIMultiDict(headers)) == expected


def test_caching_headers_are_case_insensitive():
    assert check_caching(CIMultiDict({"cache-control": "no-store", "etag": '"1"'})) == []


@pytest.mark.parametrize(
    "headers,expected",
    [
        ({"Content-Encoding": "gzip"}, []),
        ({"Content-Encoding": "deflate"}, []),
        ({}, ["Missing Content-Encoding header in response"]),
        ({"Content-Encoding": "br"}, ["Invalid Content-Encoding header in response: br"]),
        ({"Content-Encoding": "gzip, br"}, ["Invalid Content-Encoding header in response: gzip, br"]),
    ],
)
def test_check_compression(headers, expected):
    assert check_compression(CIMultiDict(headers)) == expected
