"""
Edit data model: a single point of change between a reference and a
mutated sequence.

An edit is exactly one of:
- SubstitutionEdit: the reference symbol at `position` is replaced by `base`
- InsertionEdit: `seq` is inserted between reference positions
  `position` and `position + 1`
- DeletionEdit: the reference range `position..position + length - 1` is removed

All positions are 1-based coordinates on the reference sequence.
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from numbers import Integral
from typing import Any, ClassVar, Tuple, Union

from ..errors import InvalidEditError, MalformedNotationError


class EditKind(Enum):
    """Variant tag of an edit."""
    SUBSTITUTION = "substitution"
    INSERTION = "insertion"
    DELETION = "deletion"


def _check_position(edit: Any, position: Any) -> None:
    name = type(edit).__name__
    if isinstance(position, bool) or not isinstance(position, Integral):
        raise InvalidEditError(
            f"{name} position must be an integer, got {position!r}",
            field='position', value=position,
        )
    if position < 1:
        raise InvalidEditError(
            f"{name} cannot be at a position outside the sequence: {position}",
            field='position', value=position,
        )
    # Normalise numpy/other integral types to int
    object.__setattr__(edit, 'position', int(position))


@total_ordering
class Edit:
    """Common behaviour of the three edit variants.

    Edits are ordered by left position, then by length. Two edits of
    different variants never compare equal, even when they share a
    position and length; in that case neither sorts before the other.
    """

    kind: ClassVar[EditKind]

    def sort_key(self) -> Tuple[int, int]:
        return (self.left_position, self.length)

    def __lt__(self, other: 'Edit') -> bool:
        if not isinstance(other, Edit):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        from .notation import format_edit
        try:
            return format_edit(self)
        except MalformedNotationError:
            # Payload has no notation form
            return repr(self)


@dataclass(frozen=True)
class SubstitutionEdit(Edit):
    """Replacement of the reference symbol at `position` with `base`."""
    position: int
    base: Any

    kind: ClassVar[EditKind] = EditKind.SUBSTITUTION

    def __post_init__(self):
        _check_position(self, self.position)

    def __hash__(self) -> int:
        return hash((self.kind, self.position, self.base))

    def __len__(self) -> int:
        return 1

    @property
    def length(self) -> int:
        return 1

    @property
    def left_position(self) -> int:
        return self.position

    @property
    def right_position(self) -> int:
        return self.position

    @property
    def length_delta(self) -> int:
        return 0


@dataclass(frozen=True)
class InsertionEdit(Edit):
    """Insertion of `seq` immediately after reference `position`.

    The right position is the next reference coordinate: an insertion
    marks a boundary between two reference symbols, not a reference span.
    """
    position: int
    seq: Any

    kind: ClassVar[EditKind] = EditKind.INSERTION

    def __post_init__(self):
        _check_position(self, self.position)
        try:
            size = len(self.seq)
        except TypeError:
            raise InvalidEditError(
                f"Inserted sequence must have a length, got {self.seq!r}",
                field='seq', value=self.seq,
            )
        if size == 0:
            raise InvalidEditError(
                "Insertion must be at least 1 symbol", field='seq', value=self.seq
            )

    def __hash__(self) -> int:
        return hash((self.kind, self.position, self.seq))

    def __len__(self) -> int:
        return len(self.seq)

    @property
    def length(self) -> int:
        return len(self.seq)

    @property
    def left_position(self) -> int:
        return self.position

    @property
    def right_position(self) -> int:
        return self.position + 1

    @property
    def length_delta(self) -> int:
        return self.length


@dataclass(frozen=True)
class DeletionEdit(Edit):
    """Removal of `length` reference symbols starting at `position`."""
    position: int
    length: int

    kind: ClassVar[EditKind] = EditKind.DELETION

    def __post_init__(self):
        _check_position(self, self.position)
        if isinstance(self.length, bool) or not isinstance(self.length, Integral):
            raise InvalidEditError(
                f"Deletion length must be an integer, got {self.length!r}",
                field='length', value=self.length,
            )
        if self.length < 1:
            raise InvalidEditError(
                f"Deletion must be at least 1 symbol, got length {self.length}",
                field='length', value=self.length,
            )
        object.__setattr__(self, 'length', int(self.length))

    def __hash__(self) -> int:
        return hash((self.kind, self.position, self.length))

    def __len__(self) -> int:
        return self.length

    @property
    def left_position(self) -> int:
        return self.position

    @property
    def right_position(self) -> int:
        return self.position + self.length - 1

    @property
    def length_delta(self) -> int:
        return -self.length


# The closed set of edit variants
EDIT_TYPES = (SubstitutionEdit, InsertionEdit, DeletionEdit)

AnyEdit = Union[SubstitutionEdit, InsertionEdit, DeletionEdit]


def _require_edit(obj: Any) -> AnyEdit:
    if not isinstance(obj, EDIT_TYPES):
        raise TypeError(f"Expected an edit, got {type(obj).__name__}")
    return obj


def length(edit: AnyEdit) -> int:
    """Number of symbols affected by an edit."""
    return _require_edit(edit).length


def left_position(edit: AnyEdit) -> int:
    return _require_edit(edit).left_position


def right_position(edit: AnyEdit) -> int:
    return _require_edit(edit).right_position


def length_delta(edit: AnyEdit) -> int:
    """Net change in sequence length if `edit` were applied.

    0 for substitutions, +length for insertions, -length for deletions.
    """
    return _require_edit(edit).length_delta
