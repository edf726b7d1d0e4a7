from __future__ import annotations

from typing import Optional, Sequence

from .table import DecompositionTable, getDecompositionTable


def reorder(codes: list[int], table: Optional[DecompositionTable] = None) -> None:
    """Put `codes` in canonical order, in place.

    Per Unicode Annex #15, two adjacent code points are an exchangeable pair
    when neither is a starter (combining class 0) and the class of the first
    is greater than the class of the second. After each exchange the scan
    steps back so the pair ending just before the swap is looked at again.
    """
    if table is None:
        table = getDecompositionTable()
    classOf = table.combiningClass

    i = 1
    while i < len(codes):
        prevClass = classOf(codes[i - 1])
        nextClass = classOf(codes[i])
        if prevClass and nextClass and prevClass > nextClass:
            codes[i - 1], codes[i] = codes[i], codes[i - 1]
            if i > 1:
                i -= 2
        i += 1


def isCanonicallyOrdered(
    codes: Sequence[int], table: Optional[DecompositionTable] = None
) -> bool:
    if table is None:
        table = getDecompositionTable()
    classes = [table.combiningClass(code) for code in codes]
    return all(
        not (prevClass and nextClass) or prevClass <= nextClass
        for prevClass, nextClass in zip(classes, classes[1:])
    )
