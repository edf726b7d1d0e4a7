class SASLPrepareError(Exception):
    pass


class MalformedInputError(SASLPrepareError, ValueError):
    def __init__(self, message, offset=None):
        super().__init__(message)
        self.offset = offset


class UnsupportedEncodingError(SASLPrepareError):
    pass


class UnknownCodePointError(SASLPrepareError, LookupError):
    def __init__(self, codePoint):
        shown = codePoint & 0xFFFFFFFF if -0x80000000 <= codePoint < 0 else codePoint
        super().__init__(f"no table entry for code point 0x{shown:X}")
        self.codePoint = codePoint


class IllFormedTableError(SASLPrepareError):
    pass
