# File: tests/test_hashing.py
import hashlib
import zlib

import pytest

from check_pages.hashing import Crc32, ExpectedHash, digest_stream, new_digest


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


@pytest.mark.parametrize(
    "url,expected",
    [
        ("http://e.com/a.zip?sha1=ABC", ExpectedHash("sha1", "ABC")),
        ("http://e.com/a.zip?md5=abc", ExpectedHash("md5", "abc")),
        ("http://e.com/a.zip?crc32=00000000", ExpectedHash("crc32", "00000000")),
        # sha1 wins over md5 and crc32 wherever it appears
        ("http://e.com/a?f=v&crc32=1&md5=2&sha1=3&g=v", ExpectedHash("sha1", "3")),
        ("http://e.com/a?md5=2&crc32=1", ExpectedHash("md5", "2")),
        ("http://e.com/a?name=value", None),
        ("http://e.com/a", None),
    ],
)
def test_expected_hash_from_url(url, expected):
    assert ExpectedHash.from_url(url) == expected


def test_matches_is_case_insensitive():
    digest = "9511fa1a787d021bdf3aa9538029a44209fb5c4c"
    assert ExpectedHash("sha1", digest.upper()).matches(digest)
    assert not ExpectedHash("sha1", "abcd").matches(digest)


def test_crc32_is_zero_padded():
    crc = Crc32()
    assert crc.hexdigest() == "00000000"
    crc.update(b"a")
    crc.update(b"bc")
    assert crc.hexdigest() == f"{zlib.crc32(b'abc'):08x}"


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        new_digest("sha256")


@pytest.mark.asyncio()
@pytest.mark.parametrize("algorithm", ["sha1", "md5"])
async def test_digest_stream(algorithm):
    data = bytes(range(256)) * 10
    actual = await digest_stream(algorithm, _chunks(data[:100], data[100:]))
    assert actual == hashlib.new(algorithm, data).hexdigest()
