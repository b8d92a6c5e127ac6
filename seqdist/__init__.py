"""
seqdist — Pluggable Weighted Edit Distance
==========================================

Edit distance where the operations and their costs are parameters.

    align(levenshtein(), "pineapple", "pen").distance()        → 7
    align(levenshtein(insert=2), "", "abc").distance()         → 6
    align(damerau_levenshtein(), "ab", "ba").edit_script()     → [transpose]

Every alignment fills one cost matrix, reports the minimum cost and
reconstructs one optimal edit script.  Ties are broken by the order in
which the operations were declared, so scripts are deterministic.
Custom operations subclass EditOperation and plug into any set.
"""

from seqdist.core import (
    # Errors
    AlignmentError,
    InvalidOperationError,
    NoApplicableOperationError,
    BacktrackError,
    # Engine
    SeqPair,
    EditOperation,
    EditOperations,
    DistanceMatrix,
    EditEntry,
    align,
    patch,
)
from seqdist.measures import (
    Match, Substitute, Insert, Delete, Transpose,
    weighted, levenshtein, indel, damerau_levenshtein, preset, PRESETS,
)
from seqdist.formats import (
    tokenize, script_to_string, format_matrix, format_alignment, to_python, to_json,
)

__version__ = "0.1.0"
__all__ = [
    "AlignmentError", "InvalidOperationError",
    "NoApplicableOperationError", "BacktrackError",
    "SeqPair", "EditOperation", "EditOperations", "DistanceMatrix", "EditEntry",
    "align", "patch",
    "Match", "Substitute", "Insert", "Delete", "Transpose",
    "weighted", "levenshtein", "indel", "damerau_levenshtein", "preset", "PRESETS",
    "tokenize", "script_to_string", "format_matrix", "format_alignment",
    "to_python", "to_json",
]
