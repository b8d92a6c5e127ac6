"""
seqdist.formats — Turn alignments into text and plain data.

Supported conversions:
    • text → token sequence (characters or whitespace-separated words)
    • edit script → one-line summary
    • DistanceMatrix → text grid
    • alignment → three-row source / marker / target view
    • DistanceMatrix ↔ Python dict / JSON string (export only)
"""

import json
from typing import Any, Iterable

from .core import DistanceMatrix, EditEntry, EditOperation


GAP = "-"

TOKEN_MODES = ("chars", "words")


# ═══════════════════════════════════════════════════════════════════
#  TOKENISATION
# ═══════════════════════════════════════════════════════════════════

def tokenize(text: str, mode: str = "chars") -> list[str]:
    """Split text into the sequence that gets aligned."""
    if mode == "chars":
        return list(text)
    if mode == "words":
        return text.split()
    raise ValueError(f"Unknown token mode {mode!r}; choose from {TOKEN_MODES}")


# ═══════════════════════════════════════════════════════════════════
#  TEXT RENDERING
# ═══════════════════════════════════════════════════════════════════

def script_to_string(script: Iterable[EditOperation], sep: str = " ") -> str:
    return sep.join(op.name for op in script)


def format_matrix(dm: DistanceMatrix) -> str:
    """
    Render the cost table with the target along the top and the
    source down the side ("p" against "pen"):

            p e n
          0 1 2 3
        p 1 0 1 2
    """
    pair = dm.seq_pair
    rows: list[list[str]] = [["", ""] + [str(t) for t in pair.target]]
    for i, row in enumerate(dm.matrix()):
        label = str(pair.source[i - 1]) if i > 0 else ""
        rows.append([label] + [str(cost) for cost in row])

    width = max(len(cell) for row in rows for cell in row)
    return "\n".join(
        " ".join(cell.rjust(width) for cell in row).rstrip()
        for row in rows
    )


def format_alignment(entries: Iterable[EditEntry]) -> str:
    """
    Render an alignment as three rows.  Gaps are shown as '-':

        p i n e a p p l e
        | * | - - - - - -
        p e n - - - - - -
    """
    columns: list[tuple[str, str, str]] = []
    for entry in entries:
        for k in range(max(len(entry.old), len(entry.new), 1)):
            src = str(entry.old[k]) if k < len(entry.old) else GAP
            tgt = str(entry.new[k]) if k < len(entry.new) else GAP
            columns.append((src, entry.op.symbol, tgt))

    if not columns:
        return ""

    widths = [max(len(cell) for cell in column) for column in columns]
    lines = []
    for row in range(3):
        lines.append(" ".join(
            column[row].ljust(width) for column, width in zip(columns, widths)
        ).rstrip())
    return "\n".join(lines)


# ═══════════════════════════════════════════════════════════════════
#  PYTHON / JSON EXPORT
# ═══════════════════════════════════════════════════════════════════

def entry_to_python(entry: EditEntry) -> dict[str, Any]:
    return {
        "op": entry.op.name,
        "source_index": entry.source_index,
        "target_index": entry.target_index,
        "old": list(entry.old),
        "new": list(entry.new),
        "cost": entry.cost,
    }


def to_python(dm: DistanceMatrix) -> dict[str, Any]:
    """
    Export an alignment as plain Python data.

    Keys: distance, script (operation names), matrix (list of rows),
    alignment (one dict per step).
    """
    entries = dm.alignment()
    return {
        "distance": dm.distance(),
        "script": [entry.op.name for entry in entries],
        "matrix": [list(row) for row in dm.matrix()],
        "alignment": [entry_to_python(entry) for entry in entries],
    }


def to_json(dm: DistanceMatrix, **kwargs) -> str:
    """Export an alignment as a JSON string.  Elements must be JSON-serialisable."""
    return json.dumps(to_python(dm), **kwargs)
