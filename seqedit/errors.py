"""
Exception types raised by seqedit.

Both constructor-time failures and notation failures subclass ValueError,
so callers that already guard sequence input with ``except ValueError``
keep working.
"""

from typing import Any, Optional


class SeqEditError(Exception):
    """Base class for all seqedit errors."""


class InvalidEditError(SeqEditError, ValueError):
    """An edit was constructed with a field that cannot describe a valid edit.

    Attributes:
        field: Name of the offending field ('position', 'length', 'seq', ...)
        value: The rejected value
        token: Notation token being parsed when the error was raised, if any
    """

    def __init__(self, message: str, field: str, value: Any, token: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.value = value
        self.token = token

    def __str__(self) -> str:
        message = super().__str__()
        if self.token is not None:
            return f'{message} (in edit "{self.token}")'
        return message


class MalformedNotationError(SeqEditError, ValueError):
    """A notation token could not be parsed into an edit."""

    def __init__(self, token: Any, reason: Optional[str] = None):
        message = f'Failed to parse edit "{token}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.token = token
        self.reason = reason


class ReferenceMismatchError(InvalidEditError):
    """An edit does not fit the reference sequence it is applied to."""
