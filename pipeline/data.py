"""Loading and splitting of message data frames."""

from collections.abc import Iterable, Sequence
import csv
from pathlib import Path
from typing import NamedTuple

import pandas as pd
from sklearn import model_selection

from common.types import Record, TextLoaderColumn


class TrainTestData(NamedTuple):
  training_data: pd.DataFrame
  test_data: pd.DataFrame


def load_from_text_file(
  path: Path | str,
  columns: Sequence[TextLoaderColumn],
  has_header: bool = False,
  separator: str = "\t",
) -> pd.DataFrame:
  """Reads the declared columns of a delimited text file.

  Fields are taken verbatim: quotes carry no meaning and empty fields are
  read as empty strings.

  Args:
    path: Path to the text file.
    columns: Name, kind and zero-based position of every column to read.
    has_header: If *True*, the first line is skipped.
    separator: Field separator.

  Returns:
    A data frame with one column per entry of `columns`, in that order.

  Raises:
    FileNotFoundError: `path` does not exist.
    ValueError: No columns are declared, or the file has fewer
      fields than a declared column position requires.
  """
  if not columns:
    raise ValueError("At least one column must be declared.")
  frame = pd.read_csv(
    path, sep=separator, header=None,
    skiprows=1 if has_header else 0,
    dtype={column.index: column.kind.value for column in columns},
    quoting=csv.QUOTE_NONE, keep_default_na=False,
  )
  required = max(column.index for column in columns) + 1
  if len(frame.columns) < required:
    raise ValueError(
      f"'{path}' has {len(frame.columns)} field(s) per line, "
      f"column position {required - 1} is declared."
    )
  selected = frame[[column.index for column in columns]]
  if selected.isna().any().any():
    raise ValueError(f"'{path}' has lines with missing fields.")
  selected.columns = [column.name for column in columns]
  return selected.reset_index(drop=True)


def load_from_records(records: Iterable[Record]) -> pd.DataFrame:
  return pd.DataFrame([dict(record) for record in records])


def train_test_split(
  data: pd.DataFrame,
  test_fraction: float = 0.1,
  seed: int | None = None,
  stratification_column_name: str | None = None,
) -> TrainTestData:
  """Randomly splits `data` into a training and a test part.

  Args:
    data: Rows to split.
    test_fraction: Fraction of rows assigned to the test part.
    seed: Optional, seed of the random split.
    stratification_column_name: Optional, a column whose value
      distribution is preserved in both parts.

  Returns:
    Training and test data frames.
  """
  if not 0.0 < test_fraction < 1.0:
    raise ValueError(
      f"Test fraction must be between 0 and 1, got {test_fraction}."
    )
  training_data, test_data = model_selection.train_test_split(
    data, test_size=test_fraction, random_state=seed, shuffle=True,
    stratify=(data[stratification_column_name]
              if stratification_column_name is not None else None),
  )
  return TrainTestData(training_data, test_data)
