"""
Edits placed on a concrete reference sequence.

A Haplotype holds a reference and a set of non-overlapping edits,
ordered left to right, and can rebuild the mutated sequence from them.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional
import logging

from ..errors import ReferenceMismatchError
from .edit import AnyEdit, InsertionEdit, SubstitutionEdit
from .notation import format_edits, parse_edits, split_notation

logger = logging.getLogger(__name__)


def validate_edit(edit: AnyEdit, reference: Any) -> None:
    """
    Check that an edit lies within the bounds of a reference sequence.

    Insertions may follow the last reference base; substitutions and
    deletions must cover existing reference bases only.

    Raises:
        ReferenceMismatchError: If the edit reaches past the reference
    """
    ref_len = len(reference)
    if isinstance(edit, InsertionEdit):
        if edit.position > ref_len:
            raise ReferenceMismatchError(
                f"Insertion after position {edit.position} is outside the reference "
                f"(length {ref_len})",
                field='position', value=edit.position,
            )
    elif edit.right_position > ref_len:
        raise ReferenceMismatchError(
            f"{type(edit).__name__} spanning {edit.left_position}-{edit.right_position} "
            f"is outside the reference (length {ref_len})",
            field='position', value=edit.position,
        )


def total_length_delta(edits: Iterable[AnyEdit]) -> int:
    """Net change in sequence length from applying all edits."""
    return sum(e.length_delta for e in edits)


def _application_key(edit: AnyEdit):
    # Within a gap, edits on the base come before the insertion after it
    return (edit.left_position, isinstance(edit, InsertionEdit), edit.length)


def _cut_points(edit: AnyEdit):
    """0-based [start, end) slice of the reference the edit replaces."""
    if isinstance(edit, InsertionEdit):
        return edit.position, edit.position
    return edit.position - 1, edit.right_position


@dataclass
class Haplotype:
    """
    A reference sequence together with the edits that mutate it.

    Attributes:
        reference: Reference sequence (any sized, indexable sequence
            whose type can be built from text)
        edits: Edits on the reference, stored in edit order
    """
    reference: Any
    edits: List[AnyEdit] = field(default_factory=list)

    def __post_init__(self):
        self.edits = sorted(self.edits, key=_application_key)
        for edit in self.edits:
            validate_edit(edit, self.reference)
        self._check_overlaps()

    def _check_overlaps(self):
        cursor = 0
        previous = None
        for edit in self.edits:
            start, end = _cut_points(edit)
            # Two insertions in the same gap also conflict
            conflict = start < cursor or (
                isinstance(edit, InsertionEdit)
                and isinstance(previous, InsertionEdit)
                and start == cursor
            )
            if conflict:
                raise ReferenceMismatchError(
                    f"Edit {edit} overlaps edit {previous}",
                    field='position', value=edit.position,
                )
            cursor = end
            previous = edit

    @property
    def length_delta(self) -> int:
        return total_length_delta(self.edits)

    def apply(self) -> Any:
        """Rebuild the mutated sequence by applying edits left to right."""
        reference = self.reference
        text = str(reference)
        parts = []
        cursor = 0

        for edit in self.edits:
            start, end = _cut_points(edit)
            parts.append(text[cursor:start])
            if isinstance(edit, SubstitutionEdit):
                parts.append(str(edit.base))
            elif isinstance(edit, InsertionEdit):
                parts.append(str(edit.seq))
            cursor = end

        parts.append(text[cursor:])
        mutated = ''.join(parts)
        logger.debug(
            f"Applied {len(self.edits)} edits: {len(text)} bp -> {len(mutated)} bp"
        )
        return type(reference)(mutated)

    def to_notation(self, sep: str = ' ') -> str:
        """Render the edits, annotating substitutions with the reference base."""
        return format_edits(self.edits, reference=self.reference, sep=sep)

    @classmethod
    def from_notation(
        cls,
        reference: Any,
        text: str,
        sequence_type: Callable[[str], Any] = str,
        symbol_type: Callable[[str], Any] = str,
        check_reference: bool = False,
    ) -> 'Haplotype':
        """Parse a separated list of notation tokens onto a reference."""
        check_against: Optional[Any] = reference if check_reference else None
        edits = parse_edits(
            split_notation(text), sequence_type, symbol_type, reference=check_against
        )
        return cls(reference=reference, edits=edits)
