"""Tests for seqedit.utils module."""

import pytest
from seqedit.utils.sequence import (
    get_alphabet,
    parse_cigar,
    sequence_parser,
    symbol_parser,
)


class TestSequenceParser:
    """Test alphabet-restricted sequence builder."""

    def test_dna_sequence(self):
        """Test valid DNA is upper-cased."""
        parse = sequence_parser('dna')
        assert parse("acgt") == "ACGT"
        assert parse("ACGTN") == "ACGTN"

    def test_keep_case(self):
        """Test upper-casing can be disabled."""
        assert sequence_parser('dna', uppercase=False)("acgt") == "acgt"

    def test_invalid_symbol(self):
        """Test characters outside the alphabet raise ValueError."""
        with pytest.raises(ValueError, match="'Z'"):
            sequence_parser('dna')("ACGZ")

    def test_rna_rejects_t(self):
        """Test RNA alphabet uses U instead of T."""
        assert sequence_parser('rna')("ACGU") == "ACGU"
        with pytest.raises(ValueError):
            sequence_parser('rna')("ACGT")

    def test_protein(self):
        """Test protein alphabet."""
        assert sequence_parser('protein')("mkvl") == "MKVL"
        with pytest.raises(ValueError):
            sequence_parser('protein')("MKBL")


class TestSymbolParser:
    """Test single symbol builder."""

    def test_single_symbol(self):
        """Test one valid character."""
        assert symbol_parser('dna')("c") == "C"

    def test_multiple_characters_rejected(self):
        """Test more than one character raises ValueError."""
        with pytest.raises(ValueError):
            symbol_parser('dna')("AC")


class TestAlphabet:
    """Test alphabet lookup."""

    def test_case_insensitive(self):
        """Test alphabet names are case-insensitive."""
        assert get_alphabet('DNA') == get_alphabet('dna')

    def test_unknown_alphabet(self):
        """Test unknown alphabet raises ValueError."""
        with pytest.raises(ValueError):
            get_alphabet('klingon')


class TestParseCigar:
    """Test CIGAR string parsing."""

    def test_simple(self):
        """Test basic CIGAR string."""
        assert parse_cigar("10M2I5M") == [(10, 'M'), (2, 'I'), (5, 'M')]

    def test_all_operations(self):
        """Test every operation character."""
        ops = [op for _, op in parse_cigar("1M1I1D1N1S1H1P1=1X")]
        assert ops == list("MIDNSHP=X")

    def test_invalid(self):
        """Test malformed CIGAR strings raise ValueError."""
        with pytest.raises(ValueError):
            parse_cigar("10M2Q")
        with pytest.raises(ValueError):
            parse_cigar("M10")
