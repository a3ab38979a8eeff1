"""
Input/output modules for seqedit.
"""

from .edit_table import (
    ANNOTATION_COLUMNS,
    annotate_edits,
    annotate_table,
    load_edit_table,
    write_edit_table,
)

__all__ = [
    'ANNOTATION_COLUMNS',
    'load_edit_table',
    'annotate_edits',
    'annotate_table',
    'write_edit_table',
]
