"""
Sequence utilities and the default sequence/symbol builders.

Edits do not depend on a concrete sequence type. Any callable that turns
text into a sequence (or a single character into a symbol) and raises
ValueError on bad input can be used; the builders here work on plain
strings restricted to an alphabet.
"""

import re
from typing import Callable, Dict, FrozenSet, List, Tuple

ALPHABETS: Dict[str, FrozenSet[str]] = {
    'dna': frozenset('ACGTN'),
    'rna': frozenset('ACGUN'),
    'protein': frozenset('ACDEFGHIKLMNPQRSTVWYX'),
    'any': frozenset('ABCDEFGHIJKLMNOPQRSTUVWXYZ'),
}


def get_alphabet(name: str) -> FrozenSet[str]:
    """Look up an alphabet by name (case-insensitive)."""
    try:
        return ALPHABETS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown alphabet: {name} (choose from {', '.join(sorted(ALPHABETS))})"
        )


def sequence_parser(alphabet: str = 'dna', uppercase: bool = True) -> Callable[[str], str]:
    """Build a callable that validates text against an alphabet.

    Args:
        alphabet: Alphabet name ('dna', 'rna', 'protein' or 'any')
        uppercase: If True, returned sequences are upper-cased

    Returns:
        Callable that returns the (possibly upper-cased) sequence and
        raises ValueError on characters outside the alphabet
    """
    letters = get_alphabet(alphabet)

    def parse(text: str) -> str:
        for i, char in enumerate(text):
            if char.upper() not in letters:
                raise ValueError(
                    f"Invalid {alphabet} symbol '{char}' at index {i}"
                )
        return text.upper() if uppercase else text

    return parse


def symbol_parser(alphabet: str = 'dna', uppercase: bool = True) -> Callable[[str], str]:
    """Like sequence_parser, but accepts exactly one character."""
    parse_sequence = sequence_parser(alphabet, uppercase)

    def parse(char: str) -> str:
        if len(char) != 1:
            raise ValueError(f"Expected a single {alphabet} symbol, got '{char}'")
        return parse_sequence(char)

    return parse


def parse_cigar(cigar_str: str) -> List[Tuple[int, str]]:
    """Parse CIGAR string into list of (length, operation) tuples.

    CIGAR operations:
    - M: alignment match (can be match or mismatch)
    - I: insertion to reference
    - D: deletion from reference
    - N: skipped region from reference
    - S: soft clipping (sequence present but not aligned)
    - H: hard clipping (sequence not present)
    - P: padding
    - =: sequence match
    - X: sequence mismatch

    Raises ValueError if the string contains anything else.
    """
    if not re.fullmatch(r'(\d+[MIDNSHP=X])*', cigar_str):
        raise ValueError(f"Invalid CIGAR string: {cigar_str}")
    pattern = re.compile(r'(\d+)([MIDNSHP=X])')
    return [(int(length), op) for length, op in pattern.findall(cigar_str)]
