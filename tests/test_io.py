"""Tests for seqedit.io module."""

import pandas as pd
import pytest
from seqedit.config import NotationConfig
from seqedit.core.edit import DeletionEdit, InsertionEdit, SubstitutionEdit
from seqedit.errors import MalformedNotationError
from seqedit.io.edit_table import (
    ANNOTATION_COLUMNS,
    annotate_edits,
    annotate_table,
    load_edit_table,
    write_edit_table,
)


@pytest.fixture
def edit_table(tmp_path):
    path = tmp_path / "edits.tsv"
    path.write_text(
        "sample\tedit\n"
        "s1\tG16C\n"
        "s2\tΔ1-2\n"
        "s3\t11tac\n",
        encoding="utf-8",
    )
    return path


class TestLoadEditTable:
    """Test loading edit tables."""

    def test_load(self, edit_table):
        """Test tokens are parsed and other columns kept."""
        df = load_edit_table(edit_table)
        assert len(df) == 3
        assert list(df['sample']) == ['s1', 's2', 's3']
        assert list(df['edit_obj']) == [
            SubstitutionEdit(16, 'C'),
            DeletionEdit(1, 2),
            InsertionEdit(11, 'TAC'),
        ]

    def test_custom_column(self, tmp_path):
        """Test token column comes from the configuration."""
        path = tmp_path / "edits.tsv"
        path.write_text("variant\nA3G\n", encoding="utf-8")
        df = load_edit_table(path, NotationConfig(token_column='variant'))
        assert df['edit_obj'][0] == SubstitutionEdit(3, 'G')

    def test_missing_column(self, tmp_path):
        """Test missing token column raises ValueError."""
        path = tmp_path / "edits.tsv"
        path.write_text("sample\tmutation\ns1\tG16C\n", encoding="utf-8")
        with pytest.raises(ValueError, match="'edit' column"):
            load_edit_table(path)

    def test_invalid_row_raises(self, tmp_path):
        """Test malformed tokens raise by default."""
        path = tmp_path / "edits.tsv"
        path.write_text("edit\nG16C\nabc\n", encoding="utf-8")
        with pytest.raises(MalformedNotationError):
            load_edit_table(path)

    def test_skip_invalid(self, tmp_path):
        """Test malformed and invalid rows can be skipped."""
        path = tmp_path / "edits.tsv"
        path.write_text("edit\nG16C\nabc\nΔ5-3\n11TAC\n", encoding="utf-8")
        df = load_edit_table(path, skip_invalid=True)
        assert list(df['edit']) == ['G16C', '11TAC']
        assert list(df['edit_obj']) == [SubstitutionEdit(16, 'C'), InsertionEdit(11, 'TAC')]

    def test_reference_check(self, tmp_path):
        """Test original bases are checked when configured."""
        path = tmp_path / "edits.tsv"
        path.write_text("edit\nA2T\n", encoding="utf-8")
        config = NotationConfig(check_reference=True)
        with pytest.raises(ValueError):
            load_edit_table(path, config, reference="ACGT")
        path.write_text("edit\nC2T\n", encoding="utf-8")
        df = load_edit_table(path, config, reference="ACGT")
        assert df['edit_obj'][0] == SubstitutionEdit(2, 'T')


class TestAnnotateEdits:
    """Test edit annotation tables."""

    def test_columns_and_order(self):
        """Test rows are sorted in edit order with all columns."""
        df = annotate_edits([
            SubstitutionEdit(16, 'C'),
            InsertionEdit(11, 'TAC'),
            DeletionEdit(1, 2),
        ])
        assert list(df.columns) == ANNOTATION_COLUMNS
        assert list(df['edit']) == ['Δ1-2', '11TAC', 'N16C']
        assert list(df['kind']) == ['deletion', 'insertion', 'substitution']
        assert list(df['right_position']) == [2, 12, 16]
        assert list(df['length_delta']) == [-2, 3, 0]

    def test_reference_bases(self):
        """Test substitutions are annotated with reference bases."""
        df = annotate_edits([SubstitutionEdit(2, 'T')], reference="ACGT")
        assert df['edit'][0] == 'C2T'

    def test_empty(self):
        """Test empty input gives an empty table with all columns."""
        df = annotate_edits([])
        assert len(df) == 0
        assert list(df.columns) == ANNOTATION_COLUMNS


class TestAnnotateTable:
    """Test annotating loaded tables."""

    def test_keeps_input_columns(self, edit_table):
        """Test extra columns and original tokens are kept, rows in edit order."""
        df = annotate_table(load_edit_table(edit_table))
        assert list(df.columns) == ['sample', 'edit'] + ANNOTATION_COLUMNS[1:]
        assert list(df['sample']) == ['s2', 's3', 's1']
        assert list(df['edit']) == ['Δ1-2', '11tac', 'G16C']
        assert list(df['kind']) == ['deletion', 'insertion', 'substitution']
        assert list(df['length_delta']) == [-2, 3, 0]

    def test_ties_keep_input_order(self, tmp_path):
        """Test rows with equally ordered edits keep their input order."""
        path = tmp_path / "edits.tsv"
        path.write_text("edit\tsample\n5A\tfirst\nΔ5-5\tsecond\n", encoding="utf-8")
        df = annotate_table(load_edit_table(path))
        assert list(df['sample']) == ['first', 'second']

    def test_empty(self, tmp_path):
        """Test a table with no rows."""
        path = tmp_path / "edits.tsv"
        path.write_text("sample\tedit\n", encoding="utf-8")
        df = annotate_table(load_edit_table(path))
        assert len(df) == 0
        assert 'edit_obj' not in df.columns


class TestWriteEditTable:
    """Test writing edit tables."""

    def test_write(self, tmp_path):
        """Test TSV output can be read back."""
        df = annotate_edits([DeletionEdit(1, 2), SubstitutionEdit(16, 'C')])
        path = tmp_path / "out" / "annotated.tsv"
        write_edit_table(df, path)

        loaded = pd.read_csv(path, sep='\t')
        assert list(loaded['edit']) == ['Δ1-2', 'N16C']
        assert list(loaded['length']) == [2, 1]
