"""Column access for data frames flowing through an estimator chain.

Scalar columns are regular `pandas` columns. Vector columns, such as
featurized text, hold one 1 x n `SciPy` sparse row per cell so that
a whole vector travels with its row through filtering and splitting.
"""

from collections.abc import Iterable

import numpy as np
import pandas as pd
import scipy.sparse

from common.errors import SchemaError


def check_columns(
  data: pd.DataFrame,
  column_names: Iterable[str],
  step_name: str,
) -> None:
  missing = [name for name in column_names if name not in data.columns]
  if missing:
    raise SchemaError(
      f"{step_name} requires column(s) {missing}, "
      f"available columns are {list(data.columns)}."
    )


def to_vector_column(
  matrix: scipy.sparse.spmatrix,
  index: pd.Index,
) -> pd.Series:
  matrix = scipy.sparse.csr_matrix(matrix)
  rows = np.empty(matrix.shape[0], dtype=object)
  for i in range(matrix.shape[0]):
    rows[i] = matrix[i:i + 1]
  return pd.Series(rows, index=index)


def stack_vectors(column: pd.Series) -> scipy.sparse.csr_matrix:
  """Stacks a vector column into a single sparse matrix, one row per cell."""
  if len(column) == 0:
    raise ValueError(f"Vector column '{column.name}' has no rows.")
  return scipy.sparse.vstack(column.to_list(), format="csr")


def get_schema(data: pd.DataFrame) -> dict[str, str]:
  """Returns the column-name-to-type mapping of `data`.

  Vector columns are reported as `vector<n>`, n being the vector size.
  """
  schema = {}
  for name, dtype in data.dtypes.items():
    column = data[name]
    if (dtype == object and len(column)
        and scipy.sparse.issparse(column.iloc[0])):
      schema[name] = f"vector<{column.iloc[0].shape[1]}>"
    else:
      schema[name] = str(dtype)
  return schema
