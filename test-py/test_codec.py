import pytest

from saslprepare.core.codec import (
    decode,
    encode,
    packCharacter,
    toUnsigned32,
    unpackCode,
)
from saslprepare.core.errors import MalformedInputError, UnsupportedEncodingError

testStrings = [
    "",
    "user",
    "caf\u00e9",
    "I\u00adX",
    "\u2168",
    "\u212b \ufb01 \u00bd",
    "\U0001f600 smile",
    "\uac00\ub098\ub2e4",
    "a\u0323\u031b\u0301",
    "\u1e69\u1e0d\u0307",
]


@pytest.mark.parametrize(
    "data, expectedCodes",
    [
        (b"", []),
        (b"user", [0x75, 0x73, 0x65, 0x72]),
        ("café".encode("utf-8"), [0x63, 0x61, 0x66, 0xC3A9]),
        ("Ⅸ".encode("utf-8"), [0xE285A8]),
        ("\U0001f600".encode("utf-8"), [0xF09F9880]),
        ("\U0010ffff".encode("utf-8"), [0xF48FBFBF]),
        ("\x7f\x80".encode("utf-8"), [0x7F, 0xC280]),
        (bytearray(b"ab"), [0x61, 0x62]),
        (memoryview(b"ab"), [0x61, 0x62]),
        ("café", [0x63, 0x61, 0x66, 0xC3A9]),
    ],
)
def test_decode(data, expectedCodes):
    assert decode(data) == expectedCodes


@pytest.mark.parametrize(
    "data, expectedOffset",
    [
        (b"\x80", 0),  # lone continuation byte
        (b"ab\x80", 2),
        (b"\xc0\xaf", 0),  # overlong "/"
        (b"\xe0\x80\xaf", 0),  # overlong "/"
        (b"\xed\xa0\x80", 0),  # surrogate U+D800
        (b"\xf4\x90\x80\x80", 0),  # above U+10FFFF
        (b"x\xe2\x82", 1),  # truncated
        (b"\xc3\x28", 0),  # bad continuation
        (b"\xff", 0),
        (b"a\x00b", 1),
        ("\ud800", 0),  # lone surrogate in a str
        ("\u00e9\ud800", 2),  # offsets count encoded bytes
    ],
)
def test_decode_malformed(data, expectedOffset):
    with pytest.raises(MalformedInputError) as excinfo:
        decode(data)
    assert excinfo.value.offset == expectedOffset


@pytest.mark.parametrize("encoding", ["utf-8", "UTF8", "utf_8", "U8"])
def test_decode_encoding_accepted(encoding):
    assert decode(b"a", encoding) == [0x61]


@pytest.mark.parametrize(
    "encoding", ["latin-1", "ascii", "utf-16", "utf-8-sig", "no-such-encoding"]
)
def test_decode_encoding_rejected(encoding):
    with pytest.raises(UnsupportedEncodingError):
        decode(b"a", encoding)


@pytest.mark.parametrize(
    "codes, expectedData",
    [
        ([], b""),
        ([0x63, 0x61, 0x66, 0xC3A9], "café".encode("utf-8")),
        ([0xF09F9880], "\U0001f600".encode("utf-8")),
        # signed 32-bit spelling of the same code
        ([0xF09F9880 - 2**32], "\U0001f600".encode("utf-8")),
    ],
)
def test_encode(codes, expectedData):
    assert encode(codes) == expectedData


@pytest.mark.parametrize("text", testStrings)
def test_roundTrip(text):
    data = text.encode("utf-8")
    codes = decode(data)
    assert len(codes) == len(text)
    assert encode(codes) == data
    assert decode(encode(codes)) == codes


@pytest.mark.parametrize(
    "codes, expectedData",
    [
        # Integers that never came out of decode() are written as-is: zero
        # bytes are skipped and nothing is validated.
        ([0x410042], b"AB"),
        ([0xFF], b"\xff"),
        ([0xC0AF], b"\xc0\xaf"),
        ([0x00], b""),
    ],
)
def test_encode_unchecked(codes, expectedData):
    assert encode(codes) == expectedData


@pytest.mark.parametrize("code", [2**32, -(2**31) - 1])
def test_encode_out_of_range(code):
    with pytest.raises(ValueError):
        encode([code])


@pytest.mark.parametrize(
    "char, expectedCode",
    [("A", 0x41), ("é", 0xC3A9), ("€", 0xE282AC), ("\U0001f600", 0xF09F9880)],
)
def test_packCharacter(char, expectedCode):
    assert packCharacter(char) == expectedCode
    assert unpackCode(expectedCode) == char.encode("utf-8")


@pytest.mark.parametrize(
    "code, expectedCode",
    [(0, 0), (0x41, 0x41), (-1, 0xFFFFFFFF), (-(2**31), 0x80000000)],
)
def test_toUnsigned32(code, expectedCode):
    assert toUnsigned32(code) == expectedCode
