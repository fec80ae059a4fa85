"""Tests for data loading and splitting."""

import pandas as pd
import pytest

from common.types import DataKind, TextLoaderColumn
from pipeline.data import (
  load_from_records, load_from_text_file, train_test_split
)


_COLUMNS = [
  TextLoaderColumn("LabelText", DataKind.TEXT, 0),
  TextLoaderColumn("Message", DataKind.TEXT, 1),
]


@pytest.fixture
def spam_file(tmp_path):
  """Write a few tab-separated messages, some with quotes."""
  path = tmp_path / "messages.txt"
  path.write_text(
    'ham\tSee you "later" at the cinema\n'
    "spam\tWINNER! Claim your prize now\n"
    "ham\t\n"
    "ham\tI'll be there, don't wait\n",
    encoding="utf-8",
  )
  return path


class TestLoadFromTextFile:
  """Tests for load_from_text_file."""

  def test_reads_declared_columns(self, spam_file):
    """Test that columns are named as declared."""
    data = load_from_text_file(spam_file, _COLUMNS)
    assert list(data.columns) == ["LabelText", "Message"]
    assert len(data) == 4

  def test_keeps_quotes_verbatim(self, spam_file):
    """Test that quote characters are part of the text."""
    data = load_from_text_file(spam_file, _COLUMNS)
    assert data.Message[0] == 'See you "later" at the cinema'
    assert data.Message[3] == "I'll be there, don't wait"

  def test_keeps_empty_fields(self, spam_file):
    """Test that empty messages are read as empty strings."""
    data = load_from_text_file(spam_file, _COLUMNS)
    assert data.Message[2] == ""

  def test_column_subset_and_order(self, spam_file):
    """Test that columns can be picked out of order."""
    data = load_from_text_file(spam_file, [
      TextLoaderColumn("Message", DataKind.TEXT, 1),
    ])
    assert list(data.columns) == ["Message"]

  def test_skips_header(self, tmp_path):
    """Test that a header line is skipped when declared."""
    path = tmp_path / "scores.csv"
    path.write_text("label,score\ntrue,0.5\nfalse,1.5\n", encoding="utf-8")
    data = load_from_text_file(
      path,
      [TextLoaderColumn("Label", DataKind.BOOLEAN, 0),
       TextLoaderColumn("Score", DataKind.SINGLE, 1)],
      has_header=True, separator=",",
    )
    assert data.Label.tolist() == [True, False]
    assert data.Score.dtype == "float32"

  def test_missing_file(self, tmp_path):
    """Test that a missing file is reported as such."""
    with pytest.raises(FileNotFoundError):
      load_from_text_file(tmp_path / "missing.txt", _COLUMNS)

  def test_too_few_fields(self, tmp_path):
    """Test that a file without the declared column position fails."""
    path = tmp_path / "labels.txt"
    path.write_text("ham\nspam\n", encoding="utf-8")
    with pytest.raises(ValueError):
      load_from_text_file(path, _COLUMNS)

  def test_no_columns(self, spam_file):
    """Test that at least one column must be declared."""
    with pytest.raises(ValueError):
      load_from_text_file(spam_file, [])


class TestLoadFromRecords:
  """Tests for load_from_records."""

  def test_one_row_per_record(self):
    """Test that records become rows in order."""
    data = load_from_records([
      {"LabelText": "", "Message": "first"},
      {"LabelText": "", "Message": "second"},
    ])
    assert data.Message.tolist() == ["first", "second"]


class TestTrainTestSplit:
  """Tests for train_test_split."""

  def test_fractions(self, messages_df):
    """Test that the test part holds the requested fraction of rows."""
    split = train_test_split(messages_df, test_fraction=0.2, seed=1)
    assert len(split.test_data) == 6
    assert len(split.training_data) == 24

  def test_parts_are_disjoint(self, messages_df):
    """Test that no row lands in both parts."""
    split = train_test_split(messages_df, test_fraction=0.2, seed=1)
    assert not set(split.training_data.index) & set(split.test_data.index)

  def test_seeded_split_is_repeatable(self, messages_df):
    """Test that the same seed produces the same split."""
    first = train_test_split(messages_df, test_fraction=0.2, seed=1)
    second = train_test_split(messages_df, test_fraction=0.2, seed=1)
    pd.testing.assert_frame_equal(first.test_data, second.test_data)

  def test_stratification(self, messages_df):
    """Test that stratification keeps the label ratio in the test part."""
    split = train_test_split(messages_df, test_fraction=0.3, seed=1,
                             stratification_column_name="LabelText")
    assert (split.test_data.LabelText == "spam").sum() == 3

  @pytest.mark.parametrize("test_fraction", [0.0, 1.0, 1.5])
  def test_invalid_fraction(self, messages_df, test_fraction):
    """Test that the test fraction must be strictly between 0 and 1."""
    with pytest.raises(ValueError):
      train_test_split(messages_df, test_fraction=test_fraction)

  def test_context_catalog_uses_seed(self, context, messages_df):
    """Test that the context catalog seeds the split."""
    first = context.data.train_test_split(messages_df, test_fraction=0.2)
    second = train_test_split(messages_df, test_fraction=0.2,
                              seed=context.seed)
    pd.testing.assert_frame_equal(first.test_data, second.test_data)
