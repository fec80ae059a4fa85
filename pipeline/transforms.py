"""Column transforms as part of a Scikit-learn pipeline."""

from collections.abc import Sequence
from typing import Any

import joblib
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.pipeline import FeatureUnion, make_pipeline
from sklearn.preprocessing import Normalizer
from sklearn.utils.validation import check_is_fitted

from common.errors import DomainError
from pipeline.schema import check_columns, to_vector_column


class ValueMap(BaseEstimator, TransformerMixin):
  """Maps the values of one column to another column through `keys -> values`.

  Fitting validates the mapping against the data: every value of the input
  column must be one of `keys`. When transforming, values that are not among
  `keys` yield the default of the mapped type, e.g. *False* for booleans,
  so that unlabeled rows can still be scored.

  Attributes:
    keys: Values expected in the input column.
    values: Values written to the output column, position-wise to `keys`.
    output_column_name: Name of the produced column.
    input_column_name: Name of the consumed column.
  """

  def __init__(
    self,
    keys: Sequence[Any],
    values: Sequence[Any],
    output_column_name: str,
    input_column_name: str,
  ):
    self.keys = keys
    self.values = values
    self.output_column_name = output_column_name
    self.input_column_name = input_column_name

  def fit(self, X: pd.DataFrame, y: Any = None) -> "ValueMap":
    if len(self.keys) != len(self.values):
      raise ValueError(
        f"{len(self.keys)} key(s) cannot be mapped to "
        f"{len(self.values)} value(s)."
      )
    if not self.keys:
      raise ValueError("At least one key must be provided.")
    check_columns(X, [self.input_column_name], type(self).__name__)
    unknown = set(X[self.input_column_name].unique()) - set(self.keys)
    if unknown:
      raise DomainError(
        f"Column '{self.input_column_name}' holds value(s) "
        f"{sorted(map(str, unknown))} outside of {list(self.keys)}."
      )
    self.mapping_ = dict(zip(self.keys, self.values))
    self.default_ = type(self.values[0])()
    return self

  def transform(self, X: pd.DataFrame) -> pd.DataFrame:
    check_is_fitted(self)
    check_columns(X, [self.input_column_name], type(self).__name__)
    mapped = [self.mapping_.get(value, self.default_)
              for value in X[self.input_column_name]]
    return X.assign(**{
      self.output_column_name: pd.Series(mapped, index=X.index)
    })


class FeaturizeText(BaseEstimator, TransformerMixin):
  """Converts a text column into a vector column of `TF-IDF` features.

  Word n-grams and character n-grams are weighted independently and the
  combined vector is normalized per row.
  """

  def __init__(
    self,
    output_column_name: str,
    input_column_name: str | None = None,
    word_ngram_range: tuple[int, int] = (1, 2),
    char_ngram_range: tuple[int, int] = (3, 3),
  ):
    self.output_column_name = output_column_name
    self.input_column_name = input_column_name
    self.word_ngram_range = word_ngram_range
    self.char_ngram_range = char_ngram_range

  @property
  def _source(self) -> str:
    return self.input_column_name or self.output_column_name

  def fit(self, X: pd.DataFrame, y: Any = None) -> "FeaturizeText":
    check_columns(X, [self._source], type(self).__name__)
    self.vectorizer_ = make_pipeline(
      FeatureUnion([
        ("Words", TfidfVectorizer(
          ngram_range=self.word_ngram_range, norm=None,  # type: ignore
        )),
        ("Chars", TfidfVectorizer(
          analyzer="char_wb", ngram_range=self.char_ngram_range,
          norm=None,  # type: ignore
        )),
      ]),
      Normalizer(copy=False),
    )
    self.vectorizer_.fit(X[self._source])
    return self

  def transform(self, X: pd.DataFrame) -> pd.DataFrame:
    check_is_fitted(self)
    check_columns(X, [self._source], type(self).__name__)
    features = self.vectorizer_.transform(X[self._source])
    return X.assign(**{
      self.output_column_name: to_vector_column(features, X.index)
    })


class CacheCheckpoint(BaseEstimator):
  """Marks the position up to which fitted results are cached.

  The marker is never fitted itself: when a chain is fitted, all steps
  before it are fitted as one unit through `memory`.
  """

  def __init__(self, memory: joblib.Memory | None = None):
    self.memory = memory
