"""Context shared by all steps of an estimator chain.

The context is a catalog: steps are drawn from it rather than constructed
directly, so that every step of a chain shares the same random seed and
checkpoint cache.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import joblib
import pandas as pd

from common.types import DefaultColumnNames, TextLoaderColumn
from pipeline import data
from pipeline.trainers import (
  LbfgsLogisticRegressionTrainer, SgdCalibratedTrainer
)
from pipeline.transforms import FeaturizeText, ValueMap


class _ContextCatalog:
  """Base of the catalogs that hand out steps bound to a context."""

  def __init__(self, context: "Context"):
    self._context = context


class DataCatalog(_ContextCatalog):
  """Catalog of data loading and splitting operations."""

  def load_from_text_file(
    self,
    path: Path | str,
    columns: Sequence[TextLoaderColumn],
    has_header: bool = False,
    separator: str = "\t",
  ) -> pd.DataFrame:
    """Loads a delimited text file, see `data.load_from_text_file`."""
    return data.load_from_text_file(
      path, columns, has_header=has_header, separator=separator
    )

  def train_test_split(
    self,
    frame: pd.DataFrame,
    test_fraction: float = 0.1,
    stratification_column_name: str | None = None,
  ) -> data.TrainTestData:
    """Splits `frame` into training and test data seeded by the context."""
    return data.train_test_split(
      frame, test_fraction=test_fraction, seed=self._context.seed,
      stratification_column_name=stratification_column_name,
    )


class ConversionCatalog(_ContextCatalog):
  """Catalog of column conversions."""

  def value_map(
    self,
    keys: Sequence[Any],
    values: Sequence[Any],
    output_column_name: str,
    input_column_name: str,
  ) -> ValueMap:
    """Creates a `ValueMap` from `keys` to `values`."""
    return ValueMap(list(keys), list(values),
                    output_column_name, input_column_name)


class TextCatalog(_ContextCatalog):
  """Catalog of text transforms."""

  def featurize_text(
    self,
    output_column_name: str,
    input_column_name: str | None = None,
  ) -> FeaturizeText:
    """Creates a TF-IDF `FeaturizeText` step."""
    return FeaturizeText(output_column_name, input_column_name)


class TransformsCatalog(_ContextCatalog):
  """Catalog of column transforms, grouped by kind."""

  def __init__(self, context: "Context"):
    super().__init__(context)
    self.conversion = ConversionCatalog(context)
    self.text = TextCatalog(context)


class BinaryClassificationTrainers(_ContextCatalog):
  """Catalog of binary classification trainers seeded by the context."""

  def sgd_calibrated(
    self,
    label_column_name: str = DefaultColumnNames.LABEL,
    feature_column_name: str = DefaultColumnNames.FEATURES,
    **params,
  ) -> SgdCalibratedTrainer:
    """Creates an `SgdCalibratedTrainer`."""
    return SgdCalibratedTrainer(
      label_column_name, feature_column_name,
      seed=self._context.seed, **params,
    )

  def lbfgs_logistic_regression(
    self,
    label_column_name: str = DefaultColumnNames.LABEL,
    feature_column_name: str = DefaultColumnNames.FEATURES,
    **params,
  ) -> LbfgsLogisticRegressionTrainer:
    """Creates an `LbfgsLogisticRegressionTrainer`."""
    return LbfgsLogisticRegressionTrainer(
      label_column_name, feature_column_name,
      seed=self._context.seed, **params,
    )


class BinaryClassificationCatalog(_ContextCatalog):
  """Catalog of binary classification operations."""

  def __init__(self, context: "Context"):
    super().__init__(context)
    self.trainers = BinaryClassificationTrainers(context)


class Context:
  """Context that is threaded through an estimator chain.

  Attributes:
    seed: Optional, the random seed handed to every seeded step.
    memory: Cache in which checkpointed chain prefixes are stored; without
      a location nothing is cached.
    data: Catalog of data loading and splitting operations.
    transforms: Catalog of column transforms.
    binary_classification: Catalog of binary classification trainers.
  """

  def __init__(
    self,
    seed: int | None = None,
    cache_location: Path | str | None = None,
  ):
    if seed is not None and seed < 0:
      raise ValueError("Random seed must be a non-negative number.")

    self.seed = seed
    self.memory = joblib.Memory(
      location=None if cache_location is None else str(cache_location),
      verbose=0,
    )
    self.data = DataCatalog(self)
    self.transforms = TransformsCatalog(self)
    self.binary_classification = BinaryClassificationCatalog(self)
