"""
Conversion of aligned reads into edits.

The alignment itself is taken as given (a CIGAR string or pysam
cigartuples); this module only walks it and reports the substitutions,
insertions and deletions it describes, in 1-based reference coordinates.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple, Union
import logging

import pysam

from ..utils.sequence import parse_cigar
from .edit import AnyEdit, DeletionEdit, InsertionEdit, SubstitutionEdit

logger = logging.getLogger(__name__)

# CIGAR operation codes (from pysam/SAM spec)
CIGAR_OPS = {
    0: 'M',   # Match/mismatch
    1: 'I',   # Insertion
    2: 'D',   # Deletion
    3: 'N',   # Skipped region (intron)
    4: 'S',   # Soft clip
    5: 'H',   # Hard clip
    6: 'P',   # Padding
    7: '=',   # Sequence match
    8: 'X',   # Sequence mismatch
}
CIGAR_CODES = {op: code for code, op in CIGAR_OPS.items()}

# Operations that consume reference bases
REF_CONSUMING_OPS = {0, 2, 3, 7, 8}  # M, D, N, =, X

# Operations that consume query (read) bases
QUERY_CONSUMING_OPS = {0, 1, 4, 7, 8}  # M, I, S, =, X

ALIGNED_OPS = {0, 7, 8}
DELETION_OPS = {2, 3}


@dataclass
class CigarOperation:
    """Represents a single CIGAR operation with 0-based coordinates."""
    op_code: int
    op_char: str
    length: int
    ref_start: int
    ref_end: int
    query_start: int
    query_end: int


def to_cigartuples(cigar: Union[str, Sequence[Tuple[int, int]]]) -> List[Tuple[int, int]]:
    """Normalise a CIGAR string or pysam cigartuples to (op_code, length) pairs."""
    if isinstance(cigar, str):
        return [(CIGAR_CODES[op], length) for length, op in parse_cigar(cigar)]
    return [(int(op), int(length)) for op, length in cigar]


def parse_cigar_to_operations(
    cigartuples: Sequence[Tuple[int, int]],
    ref_start: int = 0
) -> List[CigarOperation]:
    """
    Expand CIGAR operations with reference and query coordinates.

    Args:
        cigartuples: (op_code, length) pairs as produced by pysam
        ref_start: 0-based reference position of the first aligned base

    Returns:
        List of CigarOperation objects
    """
    operations = []
    ref_pos = ref_start
    query_pos = 0

    for op_code, length in cigartuples:
        op_char = CIGAR_OPS.get(op_code, '?')

        ref_end = ref_pos + length if op_code in REF_CONSUMING_OPS else ref_pos
        query_end = query_pos + length if op_code in QUERY_CONSUMING_OPS else query_pos

        operations.append(CigarOperation(
            op_code=op_code,
            op_char=op_char,
            length=length,
            ref_start=ref_pos,
            ref_end=ref_end,
            query_start=query_pos,
            query_end=query_end,
        ))

        ref_pos = ref_end
        query_pos = query_end

    return operations


def _mismatches(op: CigarOperation, reference: str, query: str, symbol_type) -> List[AnyEdit]:
    if op.ref_end > len(reference) or op.query_end > len(query):
        raise ValueError(
            f"CIGAR operation {op.length}{op.op_char} extends beyond the sequences "
            f"(reference {len(reference)} bp, query {len(query)} bp)"
        )

    edits = []
    for offset in range(op.length):
        ref_base = reference[op.ref_start + offset].upper()
        query_base = query[op.query_start + offset]
        # N never counts as a mismatch
        if ref_base == 'N' or query_base.upper() == 'N':
            continue
        if ref_base != query_base.upper():
            edits.append(SubstitutionEdit(op.ref_start + offset + 1, symbol_type(query_base)))
    return edits


def edits_from_cigar(
    cigar: Union[str, Sequence[Tuple[int, int]]],
    reference: str,
    query: str,
    ref_start: int = 0,
    sequence_type: Callable[[str], Any] = str,
    symbol_type: Callable[[str], Any] = str,
) -> List[AnyEdit]:
    """
    Extract the edits described by an alignment.

    Args:
        cigar: CIGAR string (e.g. "5M2D3M") or pysam cigartuples
        reference: Reference sequence the query is aligned to
        query: Query (read) sequence, including soft-clipped bases
        ref_start: 0-based reference position where the alignment starts
        sequence_type: Builds inserted sequences from query text
        symbol_type: Builds substituted symbols from query bases

    Returns:
        Edits in reference order
    """
    edits = []
    for op in parse_cigar_to_operations(to_cigartuples(cigar), ref_start):
        if op.op_code in ALIGNED_OPS:
            edits.extend(_mismatches(op, reference, query, symbol_type))
        elif op.op_code in DELETION_OPS:
            edits.append(DeletionEdit(op.ref_start + 1, op.length))
        elif op.op_code == 1:  # I = insertion
            if op.ref_start == 0:
                logger.warning(
                    f"Skipping {op.length} bp insertion before the first reference base"
                )
                continue
            inserted = sequence_type(query[op.query_start:op.query_end])
            # Insertion sits after the preceding reference base (1-based ref_start)
            edits.append(InsertionEdit(op.ref_start, inserted))

    return edits


def edits_from_read(
    read: pysam.AlignedSegment,
    reference: str,
    sequence_type: Callable[[str], Any] = str,
    symbol_type: Callable[[str], Any] = str,
) -> List[AnyEdit]:
    """
    Extract edits from an aligned read.

    Args:
        read: pysam AlignedSegment object
        reference: Sequence of the contig the read is aligned to

    Returns:
        Edits in reference order; empty for unmapped reads
    """
    if read.is_unmapped or read.cigartuples is None or read.query_sequence is None:
        return []

    return edits_from_cigar(
        read.cigartuples,
        reference,
        read.query_sequence,
        ref_start=read.reference_start,
        sequence_type=sequence_type,
        symbol_type=symbol_type,
    )
