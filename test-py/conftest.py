import pytest

from saslprepare.core.table import (
    DecompositionTable,
    TableEntry,
    getDecompositionTable,
)


@pytest.fixture(scope="session")
def table():
    return getDecompositionTable()


# A hand-made table, keys ascending: two starters, three combining marks and
# one code point that decomposes into a starter plus a mark.
smallTableEntries = [
    TableEntry(codePoint=0x41, combiningClass=0),
    TableEntry(codePoint=0x42, combiningClass=0),
    TableEntry(codePoint=0xC381, combiningClass=0, decomposition=(0x41, 0xCC81)),
    TableEntry(codePoint=0xCC81, combiningClass=230),
    TableEntry(codePoint=0xCC9B, combiningClass=216),
    TableEntry(codePoint=0xCCA3, combiningClass=220),
]


@pytest.fixture
def smallTable():
    return DecompositionTable.fromEntries(smallTableEntries)
