"""
Configuration for notation parsing and reference loading.

Configuration can be given on the command line or in a YAML file:

    notation:
      alphabet: dna
      uppercase: true
      unknown_base: N
      check_reference: false
      token_column: edit
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Union
import logging
import re

import yaml

from .utils.sequence import ALPHABETS, sequence_parser, symbol_parser

logger = logging.getLogger(__name__)

# Regex to detect if string is a literal sequence rather than a file path
SEQUENCE_PATTERN = re.compile(r'^[A-Za-z]+$')


@dataclass
class NotationConfig:
    """How notation tokens are decoded and rendered.

    Attributes:
        alphabet: Alphabet inserted sequences and substituted bases must use
        uppercase: Upper-case decoded symbols
        unknown_base: Original-base letter used when rendering a
            substitution without a reference
        check_reference: Check substitution original bases against the
            reference when one is available
        token_column: Column holding notation tokens in edit tables
    """
    alphabet: str = 'dna'
    uppercase: bool = True
    unknown_base: str = 'N'
    check_reference: bool = False
    token_column: str = 'edit'

    def __post_init__(self):
        for name in ('alphabet', 'unknown_base', 'token_column'):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}")
        for name in ('uppercase', 'check_reference'):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")

        self.alphabet = self.alphabet.lower()
        if self.alphabet not in ALPHABETS:
            raise ValueError(
                f"Unknown alphabet: {self.alphabet} "
                f"(choose from {', '.join(sorted(ALPHABETS))})"
            )
        if len(self.unknown_base) != 1 or not SEQUENCE_PATTERN.fullmatch(self.unknown_base):
            raise ValueError(f"unknown_base must be a single letter, got '{self.unknown_base}'")

    @property
    def sequence_type(self) -> Callable[[str], str]:
        return sequence_parser(self.alphabet, self.uppercase)

    @property
    def symbol_type(self) -> Callable[[str], str]:
        return symbol_parser(self.alphabet, self.uppercase)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'NotationConfig':
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            logger.warning(f"Ignoring unknown notation settings: {', '.join(unknown)}")
        return cls(**{k: v for k, v in d.items() if k in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'NotationConfig':
        """Load configuration from YAML file.

        Settings are read from a top-level 'notation' mapping if present,
        otherwise from the whole document.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {path}")

        section = data.get('notation', data)
        if not isinstance(section, dict):
            raise ValueError(f"'notation' section must be a mapping: {path}")
        return cls.from_dict(section)


def _read_fasta_sequence(path: str) -> str:
    """Read first sequence from a FASTA file."""
    sequence = []
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line.startswith('>'):
                if sequence:
                    break  # Only read first sequence
                continue
            sequence.append(line.upper())
    return ''.join(sequence)


def load_reference(value: str) -> str:
    """
    Load a reference - either a literal sequence or a FASTA file path.

    Args:
        value: Sequence string or path to a FASTA file

    Returns:
        The sequence (uppercase)

    Raises:
        ValueError: If value is neither an existing file nor a sequence, or
            the FASTA sequence contains anything but letters
    """
    value = value.strip()

    path = Path(value)
    if path.is_file():
        sequence = _read_fasta_sequence(str(path))
        if not sequence:
            raise ValueError(f"No sequence found in FASTA file: {value}")
        if not SEQUENCE_PATTERN.fullmatch(sequence):
            raise ValueError(f"FASTA file contains non-letter characters: {value}")
        logger.debug(f"Loaded {len(sequence)} bp reference from {path}")
        return sequence

    if SEQUENCE_PATTERN.fullmatch(value):
        return value.upper()

    raise ValueError(f"Reference is neither a sequence nor an existing file: {value}")
