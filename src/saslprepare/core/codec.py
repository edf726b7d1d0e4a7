import codecs

from .errors import MalformedInputError, UnsupportedEncodingError


def toUnsigned32(code: int) -> int:
    """Hosts hand us int4 arrays, so packed 4-byte codes may arrive negative.
    Map both the signed and the unsigned 32-bit spelling to the unsigned one.
    """
    if not -0x80000000 <= code <= 0xFFFFFFFF:
        raise ValueError(f"code point {code} does not fit in 32 bits")
    return code & 0xFFFFFFFF


def packCharacter(char: str) -> int:
    return int.from_bytes(char.encode("utf-8"), "big")


def unpackCode(code: int) -> bytes:
    code = toUnsigned32(code)
    return bytes(
        (code >> shift) & 0xFF for shift in (24, 16, 8, 0) if (code >> shift) & 0xFF
    )


def checkEncoding(encoding: str) -> None:
    try:
        name = codecs.lookup(encoding).name
    except LookupError:
        name = None
    if name != "utf-8":
        raise UnsupportedEncodingError(f"text encoding is not UTF-8: {encoding!r}")


def decode(data, encoding: str = "utf-8") -> list[int]:
    """Decode UTF-8 text into a list of packed code points.

    Every scalar becomes one integer holding its encoded bytes, big-endian:
    "é" (C3 A9) decodes to 0xC3A9. Illegal input raises MalformedInputError
    and nothing is returned.
    """
    checkEncoding(encoding)

    if isinstance(data, str):
        try:
            data = data.encode("utf-8")
        except UnicodeEncodeError as e:
            # Report where the bad unit would start in the encoded bytes
            offset = len(data[: e.start].encode("utf-8"))
            raise MalformedInputError(
                f"incorrect utf-8 input: {e.reason} at offset {offset}", offset=offset
            ) from e
    else:
        data = bytes(data)

    nulOffset = data.find(b"\x00")
    if nulOffset >= 0:
        raise MalformedInputError(
            f"incorrect utf-8 input: NUL byte at offset {nulOffset}",
            offset=nulOffset,
        )

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(
            f"incorrect utf-8 input: {e.reason} at offset {e.start}", offset=e.start
        ) from e

    return [packCharacter(char) for char in text]


def encode(codes) -> bytes:
    # Only the non-zero bytes of each code are written; integers that did not
    # come out of decode() are not validated.
    return b"".join(unpackCode(code) for code in codes)
