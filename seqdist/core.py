"""
seqdist.core — Pluggable Weighted Edit Distance
================================================

§1  THE PROBLEM
───────────────

Levenshtein distance fixes both the operations (insert, delete,
substitute) and their costs.  Real alignment problems rarely agree:
OCR post-correction wants cheap substitutions between look-alike
glyphs, transliteration wants asymmetric insert/delete costs, and
spelling correction wants transpositions as a single move.

seqdist keeps the dynamic program and makes everything else a
parameter.  An alignment is driven by an ordered set of operations,
each of which knows

    (a) what it costs,
    (b) which matrix cell it extends, and
    (c) how to step backwards from the cell it produced.


§2  THE COST MATRIX
───────────────────

For a source of length m and a target of length n the engine fills
an (m+1) × (n+1) table D where D[i][j] is the minimum cost of turning
source[:i] into target[:j]:

        D[0][0] = 0
        D[i][j] = min( op.apply(D, i, j)  for op in operations
                       if op is applicable at (i, j) )

An operation with offset (di, dj) reads D[i-di][j-dj].  Cells are
filled row-major (row 0 without the origin, then rows 1..m left to
right), so every offset with di ≥ 0, dj ≥ 0 and (di, dj) ≠ (0, 0)
only ever reads finished cells.  Any other offset is rejected when the
operation set is built.


§3  TIE-BREAKING
────────────────

When two operations produce the same minimum the first declared one
wins.  Backtracking uses exactly the same rule, so the reconstructed
script is a pure function of (operations, source, target):

        distance("pineapple", "pen") == 7
        script = match substitute match delete delete delete delete delete delete

with the standard (delete, insert, substitute, match) declaration.


§4  FAILURES
────────────

Two defects are fatal and reported separately:

    • NoApplicableOperationError — the set cannot price some cell
    • BacktrackError             — the set priced a cell but cannot
                                   explain how it got there

"Not applicable" for a single operation at a single cell is normal
control flow and never surfaces to callers.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Sequence


logger = logging.getLogger(__name__)

Cell = tuple[int, int]


# ═══════════════════════════════════════════════════════════════════
#  ERRORS
# ═══════════════════════════════════════════════════════════════════

class AlignmentError(Exception):
    """Base class for configuration and invariant defects."""


class InvalidOperationError(AlignmentError, ValueError):
    """An operation or an operation set is malformed."""


class NoApplicableOperationError(AlignmentError):
    """No operation of the set applies at a reachable cell."""

    def __init__(self, cell: Cell):
        super().__init__(f"No applicable operation at cell {cell}")
        self.cell = cell


class BacktrackError(AlignmentError):
    """Backtracking cannot reach cell (0, 0) from the final cell."""

    def __init__(self, cell: Cell, reason: str):
        super().__init__(f"Cannot backtrack to cell (0, 0): {reason} at cell {cell}")
        self.cell = cell


# ═══════════════════════════════════════════════════════════════════
#  SEQUENCE PAIR
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True, eq=False)
class SeqPair:
    """
    The two sequences being aligned.

    Both are held by reference, never copied.
    """
    source: Sequence[Any]
    target: Sequence[Any]

    @property
    def source_len(self) -> int:
        return len(self.source)

    @property
    def target_len(self) -> int:
        return len(self.target)

    def __repr__(self) -> str:
        return f"SeqPair({self.source!r}, {self.target!r})"


# ═══════════════════════════════════════════════════════════════════
#  EDIT OPERATIONS
# ═══════════════════════════════════════════════════════════════════

class EditOperation:
    """
    Base class for edit operations.  Not instantiated directly.

    Subclasses set `name`, `symbol` and `offset`, and override the
    hooks they need:

        applicable(pair, i, j)  precondition at cell (i, j)
        cost_at(pair, i, j)     incremental cost at cell (i, j)
        transform(old, new)     elements written when replaying

    `offset` is the (rows, columns) step back to the predecessor cell.
    Both components must be non-negative and not both zero.
    """
    name: str = "operation"
    symbol: str = "?"
    offset: Cell = (1, 1)

    def __init__(self, cost: int = 1):
        if isinstance(cost, bool) or not isinstance(cost, int) or cost < 0:
            raise InvalidOperationError(
                f"{type(self).__name__}: cost must be a non-negative integer, got {cost!r}"
            )
        self.cost = cost

    def applicable(self, pair: SeqPair, i: int, j: int) -> bool:
        return True

    def cost_at(self, pair: SeqPair, i: int, j: int) -> int:
        return self.cost

    def apply(self, matrix: "DistanceMatrix", i: int, j: int) -> Optional[int]:
        """
        Value this operation would give cell (i, j), or None when it
        does not apply there.

        Raises InvalidOperationError if `backtrack` names a cell that is
        not already filled under row-major order.
        """
        prev = self.backtrack(i, j)
        if prev is None:
            return None
        pi, pj = prev
        if not (0 <= pi <= i and 0 <= pj <= j) or (pi, pj) == (i, j):
            raise InvalidOperationError(
                f"{self.name}: predecessor {prev} of cell ({i}, {j}) is not a filled cell"
            )
        if not self.applicable(matrix.seq_pair, i, j):
            return None
        return matrix.cost(pi, pj) + self.cost_at(matrix.seq_pair, i, j)

    def backtrack(self, i: int, j: int) -> Optional[Cell]:
        """Predecessor of cell (i, j), or None if it would leave the matrix."""
        di, dj = self.offset
        if i < di or j < dj:
            return None
        return i - di, j - dj

    def transform(self, old: Sequence[Any], new: Sequence[Any]) -> Sequence[Any]:
        return new

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cost={self.cost})"


class EditOperations:
    """
    An ordered set of edit operations.

    Membership and order are fixed at construction; the operations
    themselves are not frozen, and changing one (its `cost`, say) after
    an alignment leaves that alignment's matrix unexplainable.

    Declaration order is part of the set's identity: it decides which
    operation wins a tie, both when filling and when backtracking.
    """
    __slots__ = ("_ops",)

    def __init__(self, operations: Iterable[EditOperation]):
        ops = tuple(operations)
        if not ops:
            raise InvalidOperationError("An operation set needs at least one operation")

        for op in ops:
            if not isinstance(op, EditOperation):
                raise InvalidOperationError(f"Not an EditOperation: {op!r}")
            try:
                di, dj = op.offset
            except (TypeError, ValueError):
                raise InvalidOperationError(
                    f"{op.name}: offset {op.offset!r} is not a (rows, columns) pair"
                ) from None
            if not isinstance(di, int) or not isinstance(dj, int):
                raise InvalidOperationError(f"{op.name}: offset {op.offset!r} must hold integers")
            if di < 0 or dj < 0 or (di == 0 and dj == 0):
                raise InvalidOperationError(
                    f"{op.name}: offset {op.offset} does not move towards cell (0, 0)"
                )

        if not any(op.offset[0] == 0 for op in ops):
            logger.warning("No operation moves along row 0; non-empty targets "
                           "can only be aligned against non-empty sources")
        if not any(op.offset[1] == 0 for op in ops):
            logger.warning("No operation moves along column 0; non-empty sources "
                           "can only be aligned against non-empty targets")

        self._ops = ops

    def apply(self, matrix: "DistanceMatrix", i: int, j: int) -> int:
        """
        Minimum cost over the operations applicable at cell (i, j).

        Raises NoApplicableOperationError when none applies.
        """
        best: Optional[int] = None
        for op in self._ops:
            value = op.apply(matrix, i, j)
            # strict comparison: first declared wins ties
            if value is not None and (best is None or value < best):
                best = value

        if best is None:
            raise NoApplicableOperationError((i, j))
        return best

    def backtrack(self, matrix: "DistanceMatrix", i: int, j: int) -> Optional[EditOperation]:
        """
        First declared operation that explains the value stored at
        cell (i, j), or None at the origin or when nothing does.
        """
        if i == 0 and j == 0:
            return None
        value = matrix.cost(i, j)
        for op in self._ops:
            if op.apply(matrix, i, j) == value:
                return op
        return None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(op.name for op in self._ops)

    def __iter__(self) -> Iterator[EditOperation]:
        return iter(self._ops)

    def __len__(self) -> int:
        return len(self._ops)

    def __getitem__(self, index: int) -> EditOperation:
        return self._ops[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, EditOperations):
            return NotImplemented
        return self._ops == other._ops

    def __hash__(self):
        return hash(self._ops)

    def __repr__(self) -> str:
        return f"EditOperations({list(self._ops)})"


# ═══════════════════════════════════════════════════════════════════
#  EDIT SCRIPT ENTRIES
# ═══════════════════════════════════════════════════════════════════

@dataclass
class EditEntry:
    """
    One step of an alignment.

    `old` is the slice of the source the operation consumes, starting
    at `source_index`; `new` is the slice of the target it is aligned
    with, starting at `target_index`.
    """
    op: EditOperation
    source_index: int
    target_index: int
    old: Sequence[Any]
    new: Sequence[Any]
    cost: int

    def __repr__(self) -> str:
        return (f"{self.op.name.upper()} at ({self.source_index}, {self.target_index}): "
                f"{self.old!r} → {self.new!r} (+{self.cost})")


# ═══════════════════════════════════════════════════════════════════
#  DISTANCE MATRIX
# ═══════════════════════════════════════════════════════════════════

class DistanceMatrix:
    """
    The filled cost matrix of one alignment.

    Built by `align`; immutable afterwards.  The sequences and the
    operation set are borrowed, not copied.
    """
    __slots__ = ("_pair", "_ops", "_table")

    def __init__(self, ops: EditOperations, source: Sequence[Any], target: Sequence[Any]):
        self._pair = SeqPair(source, target)
        self._ops = ops

        rows = self._pair.source_len + 1
        cols = self._pair.target_len + 1
        self._table = [[0] * cols for _ in range(rows)]

        # Row 0 is filled on its own so that cell (0, 0) stays fixed at 0.
        for j in range(1, cols):
            self._table[0][j] = ops.apply(self, 0, j)

        for i in range(1, rows):
            for j in range(cols):
                self._table[i][j] = ops.apply(self, i, j)

        logger.debug("Filled %dx%d matrix, distance %d", rows, cols, self.distance())

    @classmethod
    def align(cls, ops: EditOperations, source: Sequence[Any],
              target: Sequence[Any]) -> "DistanceMatrix":
        """Align `source` with `target` and return the cost matrix."""
        return cls(ops, source, target)

    @property
    def seq_pair(self) -> SeqPair:
        return self._pair

    @property
    def operations(self) -> EditOperations:
        return self._ops

    def cost(self, i: int, j: int) -> int:
        return self._table[i][j]

    def distance(self) -> int:
        """Total minimum cost, the value of cell (m, n)."""
        return self._table[-1][-1]

    def matrix(self) -> tuple[tuple[int, ...], ...]:
        """Read-only copy of the cost table."""
        return tuple(tuple(row) for row in self._table)

    def _trace(self) -> list[tuple[EditOperation, Cell, Cell]]:
        """
        Walk from (m, n) back to (0, 0).

        Returns (operation, predecessor, cell) triples in application
        order.
        """
        i, j = self._pair.source_len, self._pair.target_len
        steps: list[tuple[EditOperation, Cell, Cell]] = []

        while i > 0 or j > 0:
            op = self._ops.backtrack(self, i, j)
            if op is None:
                raise BacktrackError((i, j), "no operation explains the cell's cost")

            prev = op.backtrack(i, j)
            if prev is None:
                raise BacktrackError((i, j), f"{op.name} has no predecessor")
            pi, pj = prev
            if pi > i or pj > j or (pi, pj) == (i, j) or pi < 0 or pj < 0:
                raise BacktrackError((i, j), f"{op.name} steps to {prev}")

            logger.debug("Backtrack %s: (%d, %d) -> (%d, %d)", op.name, i, j, pi, pj)
            steps.append((op, (pi, pj), (i, j)))
            i, j = pi, pj

        steps.reverse()
        return steps

    def edit_script(self) -> list[EditOperation]:
        """
        One optimal edit script, in source-to-target order.

        Raises BacktrackError if the operation set cannot explain the
        matrix it produced.
        """
        return [op for op, _, _ in self._trace()]

    def alignment(self) -> list[EditEntry]:
        """The edit script with the source and target slices of each step."""
        source, target = self._pair.source, self._pair.target
        entries: list[EditEntry] = []
        for op, (pi, pj), (i, j) in self._trace():
            entries.append(EditEntry(
                op, pi, pj,
                old=source[pi:i],
                new=target[pj:j],
                cost=self._table[i][j] - self._table[pi][pj],
            ))
        return entries

    def __repr__(self) -> str:
        return (f"DistanceMatrix({self._pair.source_len + 1}x{self._pair.target_len + 1}, "
                f"distance={self.distance()})")


def align(ops: EditOperations, source: Sequence[Any], target: Sequence[Any]) -> DistanceMatrix:
    """
    Align two sequences under an operation set.

        dm = align(levenshtein(), "kitten", "sitting")
        dm.distance()       → 3
        dm.edit_script()    → [substitute, match, match, match, substitute, match, insert]
    """
    return DistanceMatrix.align(ops, source, target)


# ═══════════════════════════════════════════════════════════════════
#  PATCH (replay an alignment)
# ═══════════════════════════════════════════════════════════════════

def patch(source: Sequence[Any], entries: Iterable[EditEntry]) -> list[Any]:
    """
    Replay an alignment on `source`.

    Each entry writes `op.transform(old, new)`.  For a consistent
    operation set this is the inverse of alignment:
        patch(a, align(ops, a, b).alignment()) == list(b)
    """
    result: list[Any] = []
    position = 0

    for entry in entries:
        if entry.source_index != position:
            raise ValueError(
                f"Entry {entry!r} starts at source index {entry.source_index}, expected {position}"
            )
        result.extend(entry.op.transform(entry.old, entry.new))
        position += len(entry.old)

    if position != len(source):
        raise ValueError(f"Alignment consumes {position} of {len(source)} source elements")
    return result
