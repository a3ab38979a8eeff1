"""
seqedit - single-point sequence edits and their compact notation.

Substitutions, insertions and deletions on a reference sequence, with
ordering, hashing and a bidirectional notation (Δ1-2, 11TAC, G16C).
"""

__version__ = "0.1.0"

from .core.edit import (
    DeletionEdit,
    Edit,
    EditKind,
    InsertionEdit,
    SubstitutionEdit,
)
from .core.haplotype import Haplotype
from .core.notation import format_edit, parse_edit
from .errors import (
    InvalidEditError,
    MalformedNotationError,
    ReferenceMismatchError,
    SeqEditError,
)

__all__ = [
    "Edit",
    "EditKind",
    "SubstitutionEdit",
    "InsertionEdit",
    "DeletionEdit",
    "Haplotype",
    "parse_edit",
    "format_edit",
    "SeqEditError",
    "InvalidEditError",
    "MalformedNotationError",
    "ReferenceMismatchError",
    "__version__",
]
