"""
Reading and writing tab-separated tables of edits.

Edit tables hold one notation token per row (column 'edit' by
default); any other columns are carried through untouched.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging

import pandas as pd

from ..config import NotationConfig
from ..core.edit import AnyEdit
from ..core.notation import format_edit, parse_edit

logger = logging.getLogger(__name__)

ANNOTATION_COLUMNS = [
    'edit',
    'kind',
    'position',
    'length',
    'left_position',
    'right_position',
    'length_delta',
]


def load_edit_table(
    path: Union[str, Path],
    config: Optional[NotationConfig] = None,
    reference: Optional[str] = None,
    skip_invalid: bool = False,
) -> pd.DataFrame:
    """
    Load edits from a TSV file.

    Args:
        path: Path to TSV file
        config: Notation settings (token column, alphabet)
        reference: Optional reference, used to check substitution
            original bases when config.check_reference is set
        skip_invalid: If True, rows with unparseable tokens are logged and
            dropped instead of raising

    Returns:
        DataFrame of the table rows, with the parsed edits in an
        'edit_obj' column
    """
    config = config or NotationConfig()
    df = pd.read_csv(path, sep='\t', dtype=str, keep_default_na=False)

    column = config.token_column
    if column not in df.columns:
        raise ValueError(f"Edit table must have '{column}' column")

    check_against = reference if config.check_reference else None
    edits = []
    keep = []
    for index, token in df[column].items():
        try:
            edits.append(parse_edit(
                token, config.sequence_type, config.symbol_type, reference=check_against
            ))
            keep.append(index)
        except ValueError as e:
            if not skip_invalid:
                raise
            logger.warning(f"Skipping row {index + 1}: {e}")

    skipped = len(df) - len(keep)
    df = df.loc[keep].reset_index(drop=True)
    df['edit_obj'] = pd.Series(edits, index=df.index, dtype=object)

    logger.info(f"Loaded {len(df)} edits from {path}" + (f" ({skipped} skipped)" if skipped else ""))
    return df


def annotate_edits(
    edits: Iterable[AnyEdit],
    reference: Optional[str] = None,
    unknown_base: str = 'N',
) -> pd.DataFrame:
    """
    Tabulate edits with their positions and length changes, in edit order.

    Returns:
        DataFrame with ANNOTATION_COLUMNS
    """
    rows: List[dict] = []
    for edit in sorted(edits):
        rows.append({
            'edit': format_edit(edit, reference, unknown_base),
            'kind': edit.kind.value,
            'position': edit.position,
            'length': edit.length,
            'left_position': edit.left_position,
            'right_position': edit.right_position,
            'length_delta': edit.length_delta,
        })
    return pd.DataFrame(rows, columns=ANNOTATION_COLUMNS)


def annotate_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add edit annotations to a table returned by load_edit_table.

    Input columns, including the original notation tokens, are kept as they
    are. Rows are put in edit order; rows whose edits tie keep their input
    order. The 'edit_obj' column is dropped.

    Returns:
        DataFrame with the input columns followed by the annotation columns
    """
    edits = list(df['edit_obj'])
    order = sorted(range(len(edits)), key=lambda i: edits[i])
    out = df.iloc[order].drop(columns=['edit_obj']).reset_index(drop=True)
    edits = [edits[i] for i in order]

    out['kind'] = pd.Series([e.kind.value for e in edits], index=out.index, dtype=object)
    for name in ANNOTATION_COLUMNS[2:]:
        out[name] = pd.Series([getattr(e, name) for e in edits], index=out.index, dtype='int64')
    return out


def write_edit_table(df: pd.DataFrame, path: Union[str, Path]) -> None:
    """Write an edit table as TSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, sep='\t', index=False)
    logger.info(f"Wrote {len(df)} edits to {path}")
