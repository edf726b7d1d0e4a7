from __future__ import annotations

import logging
from typing import Iterable, Optional

from .codec import decode, encode, toUnsigned32
from .decompose import decomposeSequence
from .reorder import reorder
from .table import DecompositionTable, getDecompositionTable

logger = logging.getLogger(__name__)


def prepare(
    codes: Iterable[int], table: Optional[DecompositionTable] = None
) -> list[int]:
    """Decompose each packed code point and put the result in canonical order.

    Returns a new list; `codes` is left untouched.
    """
    if table is None:
        table = getDecompositionTable()
    codes = [toUnsigned32(code) for code in codes]
    result = decomposeSequence(codes, table)
    if len(result) != len(codes):
        logger.debug("decomposed %d code points into %d", len(codes), len(result))
    reorder(result, table)
    return result


def prepareBytes(data, encoding: str = "utf-8") -> bytes:
    return encode(prepare(decode(data, encoding)))


def prepareString(text: str) -> str:
    return prepareBytes(text).decode("utf-8")
