from __future__ import annotations

import logging
import threading
import time
from array import array
from bisect import bisect_left
from dataclasses import dataclass
from itertools import pairwise
from typing import Iterable, Iterator, Optional

import unicodedata2

from .codec import packCharacter, toUnsigned32
from .errors import IllFormedTableError, UnknownCodePointError

logger = logging.getLogger(__name__)

HANGUL_SYLLABLE_FIRST = 0xAC00
HANGUL_SYLLABLE_LAST = 0xD7A3


@dataclass(frozen=True)
class TableEntry:
    codePoint: int
    combiningClass: int = 0
    decomposition: tuple[int, ...] = ()

    @property
    def isStarter(self) -> bool:
        return self.combiningClass == 0

    @property
    def isTerminal(self) -> bool:
        return not self.decomposition


class DecompositionTable:
    """Read-only table of packed code point -> (combining class, decomposition),
    sorted by code point and searched by bisection.

    The decomposition stored for an entry is one level deep; entries it
    refers to may decompose further.
    """

    def __init__(
        self,
        codePoints: array,
        combiningClasses: bytes,
        decompositions: dict[int, tuple[int, ...]],
    ):
        if len(codePoints) != len(combiningClasses):
            raise IllFormedTableError("code point and combining class columns differ")
        for previous, current in pairwise(codePoints):
            if previous >= current:
                raise IllFormedTableError(
                    f"table is not strictly sorted at code point 0x{current:X}"
                )
        self._codePoints = codePoints
        self._combiningClasses = bytes(combiningClasses)
        # table index -> decomposition, only for non-terminal entries
        self._decompositions = dict(decompositions)

    @classmethod
    def fromEntries(cls, entries: Iterable[TableEntry]) -> DecompositionTable:
        codePoints = array("I")
        combiningClasses = bytearray()
        decompositions = {}
        for index, entry in enumerate(entries):
            if not 0 <= entry.codePoint <= 0xFFFFFFFF:
                raise IllFormedTableError(
                    f"code point {entry.codePoint} does not fit in 32 bits"
                )
            if not 0 <= entry.combiningClass <= 0xFF:
                raise IllFormedTableError(
                    f"combining class {entry.combiningClass} of code point "
                    f"0x{entry.codePoint:X} is out of range"
                )
            codePoints.append(entry.codePoint)
            combiningClasses.append(entry.combiningClass)
            if entry.decomposition:
                decompositions[index] = tuple(entry.decomposition)
        return cls(codePoints, combiningClasses, decompositions)

    @classmethod
    def fromUnicodeData(cls) -> DecompositionTable:
        codePoints = array("I")
        combiningClasses = bytearray()
        decompositions = {}
        for index, (code, combiningClass, decomposition) in enumerate(
            _iterUnicodeData()
        ):
            codePoints.append(code)
            combiningClasses.append(combiningClass)
            if decomposition:
                decompositions[index] = decomposition
        return cls(codePoints, combiningClasses, decompositions)

    def __len__(self) -> int:
        return len(self._codePoints)

    def __contains__(self, code: int) -> bool:
        return self._externalIndex(code) >= 0

    def __iter__(self) -> Iterator[TableEntry]:
        for index in range(len(self._codePoints)):
            yield self._entry(index)

    @property
    def numDecomposable(self) -> int:
        return len(self._decompositions)

    @property
    def maxDecompositionLength(self) -> int:
        return max((len(d) for d in self._decompositions.values()), default=0)

    def lookup(self, code: int) -> TableEntry:
        index = self._index(code)
        if index < 0:
            raise UnknownCodePointError(code)
        return self._entry(index)

    def find(self, code: int) -> Optional[TableEntry]:
        index = self._externalIndex(code)
        return self._entry(index) if index >= 0 else None

    def combiningClass(self, code: int) -> int:
        index = self._index(code)
        if index < 0:
            raise UnknownCodePointError(code)
        return self._combiningClasses[index]

    def decomposition(self, code: int) -> tuple[int, ...]:
        index = self._index(code)
        if index < 0:
            raise UnknownCodePointError(code)
        return self._decompositions.get(index, ())

    def _externalIndex(self, code: int) -> int:
        # Arbitrary integers from outside the pipeline: anything that is not a
        # 32-bit value simply has no entry.
        try:
            code = toUnsigned32(code)
        except ValueError:
            return -1
        return self._index(code)

    def _index(self, code: int) -> int:
        index = bisect_left(self._codePoints, code)
        if index < len(self._codePoints) and self._codePoints[index] == code:
            return index
        return -1

    def _entry(self, index: int) -> TableEntry:
        return TableEntry(
            codePoint=self._codePoints[index],
            combiningClass=self._combiningClasses[index],
            decomposition=self._decompositions.get(index, ()),
        )


def _iterUnicodeData():
    # Every scalar value a UTF-8 decode can produce, i.e. all but surrogates,
    # in ascending order. Packed UTF-8 keys sort the same way as scalars.
    for scalar in range(0x110000):
        if 0xD800 <= scalar <= 0xDFFF:
            continue
        char = chr(scalar)
        if HANGUL_SYLLABLE_FIRST <= scalar <= HANGUL_SYLLABLE_LAST:
            # Syllables stay terminal whatever mapping unicodedata2 reports
            decomposition = ()
        else:
            decomposition = parseDecompositionMapping(unicodedata2.decomposition(char))
        yield packCharacter(char), unicodedata2.combining(char), decomposition


def parseDecompositionMapping(mapping: str) -> tuple[int, ...]:
    """Convert a UCD decomposition field such as "<compat> 0020 0308" into
    packed code points. Canonical and compatibility mappings are treated alike.
    """
    return tuple(
        packCharacter(chr(int(field, 16)))
        for field in mapping.split()
        if not field.startswith("<")
    )


_table = None
_tableLock = threading.Lock()


def getDecompositionTable() -> DecompositionTable:
    global _table
    if _table is None:
        with _tableLock:
            if _table is None:
                t0 = time.perf_counter()
                table = DecompositionTable.fromUnicodeData()
                logger.info(
                    "built decomposition table from Unicode %s: "
                    "%d entries, %d decomposable, in %.2f s",
                    unicodedata2.unidata_version,
                    len(table),
                    table.numDecomposable,
                    time.perf_counter() - t0,
                )
                _table = table
    return _table
