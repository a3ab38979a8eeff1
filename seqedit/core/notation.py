"""
Compact single-token notation for edits.

    Δ1-2     deletion of reference positions 1..2
    11TAC    insertion of TAC after reference position 11
    G16C     substitution of the base at reference position 16 with C

The leading letter of a substitution is an annotation of the original
base and does not become part of the edit.
"""

import re
from typing import Any, Callable, Iterable, List, Optional

from ..errors import InvalidEditError, MalformedNotationError, ReferenceMismatchError
from .edit import AnyEdit, DeletionEdit, InsertionEdit, SubstitutionEdit

DELETION_MARK = 'Δ'

DELETION_PATTERN = re.compile(r'^Δ(\d+)-(\d+)$', re.ASCII)
INSERTION_PATTERN = re.compile(r'^(\d+)([A-Za-z]+)$', re.ASCII)
SUBSTITUTION_PATTERN = re.compile(r'^([A-Za-z])(\d+)([A-Za-z])$', re.ASCII)

# Separators accepted between tokens in a multi-edit annotation
TOKEN_SEPARATORS = re.compile(r'[\s,;]+')

# Errors raised by sequence/symbol constructors on bad letters
_COLLABORATOR_ERRORS = (ValueError, TypeError, KeyError)


def _convert(token: str, factory: Callable[[str], Any], letters: str) -> Any:
    try:
        return factory(letters)
    except _COLLABORATOR_ERRORS as e:
        raise MalformedNotationError(token, f"invalid symbols '{letters}' ({e})") from e


def _construct(token: str, cls, *args) -> AnyEdit:
    try:
        return cls(*args)
    except InvalidEditError as e:
        e.token = token
        raise


def parse_edit(
    token: str,
    sequence_type: Callable[[str], Any] = str,
    symbol_type: Callable[[str], Any] = str,
    reference: Optional[Any] = None,
) -> AnyEdit:
    """
    Parse a notation token into an edit.

    Args:
        token: Notation token, e.g. "Δ1-2", "11TAC" or "G16C"
        sequence_type: Builds an inserted sequence from a run of letters
        symbol_type: Builds a substituted symbol from a single letter
        reference: Optional reference sequence. When given, the original
            base annotated on a substitution must match the reference.

    Returns:
        DeletionEdit, InsertionEdit or SubstitutionEdit

    Raises:
        MalformedNotationError: If the token matches no notation, or its
            letters are rejected by `sequence_type` / `symbol_type`
        InvalidEditError: If the token describes an impossible edit
            (position 0, or a deletion whose stop precedes its start)
        ReferenceMismatchError: If `reference` is given and the original
            base does not match it
    """
    if not isinstance(token, str):
        raise MalformedNotationError(token, f"expected a string, got {type(token).__name__}")
    s = token.strip()

    m = DELETION_PATTERN.fullmatch(s)
    if m:
        start, stop = int(m.group(1)), int(m.group(2))
        if stop < start:
            raise InvalidEditError(
                f"Non-positive deletion length: {start}-{stop}",
                field='length', value=stop - start + 1, token=token,
            )
        return _construct(token, DeletionEdit, start, stop - start + 1)

    m = INSERTION_PATTERN.fullmatch(s)
    if m:
        seq = _convert(token, sequence_type, m.group(2))
        return _construct(token, InsertionEdit, int(m.group(1)), seq)

    m = SUBSTITUTION_PATTERN.fullmatch(s)
    if m:
        original, position = m.group(1), int(m.group(2))
        base = _convert(token, symbol_type, m.group(3))
        edit = _construct(token, SubstitutionEdit, position, base)
        if reference is not None:
            check_original_base(edit, original, reference, token=token)
        return edit

    raise MalformedNotationError(token)


def check_original_base(
    edit: SubstitutionEdit,
    original: str,
    reference: Any,
    token: Optional[str] = None,
) -> None:
    """Check the annotated original base of a substitution against a reference."""
    if edit.position > len(reference):
        raise ReferenceMismatchError(
            f"Substitution at position {edit.position} is beyond the reference "
            f"(length {len(reference)})",
            field='position', value=edit.position, token=token,
        )
    ref_base = str(reference[edit.position - 1])
    if ref_base.upper() != original.upper():
        raise ReferenceMismatchError(
            f"Original base {original} does not match reference base {ref_base} "
            f"at position {edit.position}",
            field='base', value=original, token=token,
        )


def parse_edits(
    tokens: Iterable[str],
    sequence_type: Callable[[str], Any] = str,
    symbol_type: Callable[[str], Any] = str,
    reference: Optional[Any] = None,
) -> List[AnyEdit]:
    """Parse several tokens, keeping their order."""
    return [
        parse_edit(token, sequence_type, symbol_type, reference)
        for token in tokens
    ]


def split_notation(text: str) -> List[str]:
    """Split an annotation such as "Δ1-2, 11TAC; G16C" into tokens."""
    return [t for t in TOKEN_SEPARATORS.split(text.strip()) if t]


def format_edit(
    edit: AnyEdit,
    reference: Optional[Any] = None,
    unknown_base: str = 'N',
) -> str:
    """
    Render an edit in notation form.

    Substitutions need an original base for the leading letter. It is
    taken from `reference` when given, otherwise `unknown_base` is used.
    Parsing the result gives back an equal edit.

    Raises:
        MalformedNotationError: If the edit's payload (or the original
            base taken from `reference`) cannot be written in the notation,
            e.g. a multi-letter substitution base or a gapped insertion
    """
    if isinstance(edit, DeletionEdit):
        return f"{DELETION_MARK}{edit.left_position}-{edit.right_position}"
    if isinstance(edit, InsertionEdit):
        token = f"{edit.position}{edit.seq}"
        pattern = INSERTION_PATTERN
    elif isinstance(edit, SubstitutionEdit):
        original = unknown_base
        if reference is not None and edit.position <= len(reference):
            original = str(reference[edit.position - 1])
        token = f"{original}{edit.position}{edit.base}"
        pattern = SUBSTITUTION_PATTERN
    else:
        raise TypeError(f"Expected an edit, got {type(edit).__name__}")

    if not pattern.fullmatch(token):
        raise MalformedNotationError(token, f"{edit!r} cannot be written in edit notation")
    return token


def format_edits(
    edits: Iterable[AnyEdit],
    reference: Optional[Any] = None,
    unknown_base: str = 'N',
    sep: str = ' ',
) -> str:
    """Render edits in order as a single annotation string."""
    return sep.join(format_edit(e, reference, unknown_base) for e in edits)
