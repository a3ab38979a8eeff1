"""
Utility modules for seqedit.
"""

from .sequence import (
    ALPHABETS,
    get_alphabet,
    parse_cigar,
    sequence_parser,
    symbol_parser,
)

__all__ = [
    'ALPHABETS',
    'get_alphabet',
    'sequence_parser',
    'symbol_parser',
    'parse_cigar',
]
