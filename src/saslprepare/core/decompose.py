from __future__ import annotations

from typing import Iterable, Optional

from .errors import IllFormedTableError
from .table import DecompositionTable, getDecompositionTable

# Real UCD chains are at most a few levels deep; anything beyond this means
# the table refers back to itself.
MAX_DECOMPOSITION_DEPTH = 32


def decompose(
    code: int,
    table: Optional[DecompositionTable] = None,
    maxDepth: int = MAX_DECOMPOSITION_DEPTH,
) -> list[int]:
    """Fully expand `code` into terminal code points, in order.

    Each level returns its own list and the caller concatenates them.
    Exceeding `maxDepth` levels raises IllFormedTableError.
    """
    if table is None:
        table = getDecompositionTable()
    if maxDepth < 0:
        raise IllFormedTableError(
            f"decomposition of code point 0x{code:X} exceeds the maximum depth"
        )
    decomposition = table.decomposition(code)
    if not decomposition:
        return [code]
    result = []
    for child in decomposition:
        result.extend(decompose(child, table, maxDepth - 1))
    return result


def decomposeSequence(
    codes: Iterable[int],
    table: Optional[DecompositionTable] = None,
    maxDepth: int = MAX_DECOMPOSITION_DEPTH,
) -> list[int]:
    if table is None:
        table = getDecompositionTable()
    result = []
    for code in codes:
        result.extend(decompose(code, table, maxDepth))
    return result


def decomposedLength(
    code: int,
    table: Optional[DecompositionTable] = None,
    maxDepth: int = MAX_DECOMPOSITION_DEPTH,
) -> int:
    """Number of terminal code points `code` expands to, without building them."""
    if table is None:
        table = getDecompositionTable()
    if maxDepth < 0:
        raise IllFormedTableError(
            f"decomposition of code point 0x{code:X} exceeds the maximum depth"
        )
    decomposition = table.decomposition(code)
    if not decomposition:
        return 1
    return sum(decomposedLength(child, table, maxDepth - 1) for child in decomposition)
