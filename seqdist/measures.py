"""
seqdist.measures — Built-in operations and preset operation sets.

Every preset declares its operations in the order

    delete, insert, substitute, [transpose], match

which fixes how ties are broken: trailing deletions and insertions are
preferred over substitutions when both are optimal.

    align(levenshtein(), "pineapple", "pen").distance()      → 7
    align(indel(), "abc", "axc").distance()                  → 2
    align(damerau_levenshtein(), "ab", "ba").distance()      → 1
"""

import inspect
from typing import Any, Callable, Sequence

from .core import EditOperation, EditOperations, SeqPair


# Configuration: default costs used by every preset
DEFAULT_MATCH_COST = 0
DEFAULT_SUBSTITUTE_COST = 1
DEFAULT_INSERT_COST = 1
DEFAULT_DELETE_COST = 1
DEFAULT_TRANSPOSE_COST = 1


# ═══════════════════════════════════════════════════════════════════
#  OPERATIONS
# ═══════════════════════════════════════════════════════════════════

class Match(EditOperation):
    """Keep an element that is equal on both sides."""
    name = "match"
    symbol = "|"
    offset = (1, 1)

    def __init__(self, cost: int = DEFAULT_MATCH_COST):
        super().__init__(cost)

    def applicable(self, pair: SeqPair, i: int, j: int) -> bool:
        return pair.source[i - 1] == pair.target[j - 1]

    def transform(self, old: Sequence[Any], new: Sequence[Any]) -> Sequence[Any]:
        return old


class Substitute(EditOperation):
    """
    Replace a source element with a target element.

    Only applies to unequal elements unless `unconditional` is set.
    """
    name = "substitute"
    symbol = "*"
    offset = (1, 1)

    def __init__(self, cost: int = DEFAULT_SUBSTITUTE_COST, unconditional: bool = False):
        super().__init__(cost)
        self.unconditional = unconditional

    def applicable(self, pair: SeqPair, i: int, j: int) -> bool:
        return self.unconditional or pair.source[i - 1] != pair.target[j - 1]


class Insert(EditOperation):
    """Insert a target element."""
    name = "insert"
    symbol = "+"
    offset = (0, 1)

    def __init__(self, cost: int = DEFAULT_INSERT_COST):
        super().__init__(cost)


class Delete(EditOperation):
    """Delete a source element."""
    name = "delete"
    symbol = "-"
    offset = (1, 0)

    def __init__(self, cost: int = DEFAULT_DELETE_COST):
        super().__init__(cost)

    def transform(self, old: Sequence[Any], new: Sequence[Any]) -> Sequence[Any]:
        return ()


class Transpose(EditOperation):
    """
    Swap two adjacent, different source elements: "ab" → "ba".

    Steps back two cells on both axes, so it stays safe under
    row-major fill.
    """
    name = "transpose"
    symbol = "x"
    offset = (2, 2)

    def __init__(self, cost: int = DEFAULT_TRANSPOSE_COST):
        super().__init__(cost)

    def applicable(self, pair: SeqPair, i: int, j: int) -> bool:
        s, t = pair.source, pair.target
        return (s[i - 1] == t[j - 2] and s[i - 2] == t[j - 1]
                and s[i - 1] != s[i - 2])

    def transform(self, old: Sequence[Any], new: Sequence[Any]) -> Sequence[Any]:
        return old[::-1]


# ═══════════════════════════════════════════════════════════════════
#  PRESETS
# ═══════════════════════════════════════════════════════════════════

def weighted(match: int = DEFAULT_MATCH_COST,
             substitute: int = DEFAULT_SUBSTITUTE_COST,
             insert: int = DEFAULT_INSERT_COST,
             delete: int = DEFAULT_DELETE_COST) -> EditOperations:
    """Independently weighted match / substitute / insert / delete."""
    return EditOperations((
        Delete(delete),
        Insert(insert),
        Substitute(substitute),
        Match(match),
    ))


def levenshtein(substitute: int = DEFAULT_SUBSTITUTE_COST,
                insert: int = DEFAULT_INSERT_COST,
                delete: int = DEFAULT_DELETE_COST) -> EditOperations:
    """
    The Levenshtein family: free matches, weighted edits.

    levenshtein(1, 1, 1) is the classic unit-cost distance.
    """
    return weighted(DEFAULT_MATCH_COST, substitute, insert, delete)


def indel(insert: int = DEFAULT_INSERT_COST,
          delete: int = DEFAULT_DELETE_COST) -> EditOperations:
    """
    Insertions and deletions only.

    With unit costs the distance is m + n - 2 * LCS(source, target).
    """
    return EditOperations((
        Delete(delete),
        Insert(insert),
        Match(DEFAULT_MATCH_COST),
    ))


def damerau_levenshtein(substitute: int = DEFAULT_SUBSTITUTE_COST,
                        insert: int = DEFAULT_INSERT_COST,
                        delete: int = DEFAULT_DELETE_COST,
                        transpose: int = DEFAULT_TRANSPOSE_COST) -> EditOperations:
    """
    Levenshtein plus adjacent transpositions (restricted edit distance:
    a transposed pair is never edited again).
    """
    return EditOperations((
        Delete(delete),
        Insert(insert),
        Substitute(substitute),
        Transpose(transpose),
        Match(DEFAULT_MATCH_COST),
    ))


PRESETS: dict[str, Callable[..., EditOperations]] = {
    "levenshtein": levenshtein,
    "weighted": weighted,
    "indel": indel,
    "damerau": damerau_levenshtein,
}


def preset(name: str, **costs: int) -> EditOperations:
    """
    Build a preset by name.

    Cost keywords the preset does not take are rejected, so a typo in a
    configuration never silently falls back to a default.
    """
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown preset {name!r}; choose from {sorted(PRESETS)}") from None

    accepted = inspect.signature(factory).parameters
    unknown = sorted(set(costs) - set(accepted))
    if unknown:
        raise ValueError(f"Preset {name!r} does not take {', '.join(unknown)}")
    return factory(**costs)
