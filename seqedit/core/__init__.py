"""
Core edit model, notation codec and reference helpers.
"""

from .cigar import (
    CigarOperation,
    edits_from_cigar,
    edits_from_read,
    parse_cigar_to_operations,
)
from .edit import (
    EDIT_TYPES,
    AnyEdit,
    DeletionEdit,
    Edit,
    EditKind,
    InsertionEdit,
    SubstitutionEdit,
    left_position,
    length,
    length_delta,
    right_position,
)
from .haplotype import (
    Haplotype,
    total_length_delta,
    validate_edit,
)
from .notation import (
    DELETION_MARK,
    check_original_base,
    format_edit,
    format_edits,
    parse_edit,
    parse_edits,
    split_notation,
)

__all__ = [
    # Edit model
    'Edit',
    'EditKind',
    'AnyEdit',
    'EDIT_TYPES',
    'SubstitutionEdit',
    'InsertionEdit',
    'DeletionEdit',
    'length',
    'left_position',
    'right_position',
    'length_delta',
    # Notation
    'DELETION_MARK',
    'parse_edit',
    'parse_edits',
    'split_notation',
    'format_edit',
    'format_edits',
    'check_original_base',
    # Reference
    'Haplotype',
    'validate_edit',
    'total_length_delta',
    # CIGAR
    'CigarOperation',
    'parse_cigar_to_operations',
    'edits_from_cigar',
    'edits_from_read',
]
