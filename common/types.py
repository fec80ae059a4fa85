"""General types."""

from collections.abc import Mapping, Sequence
import enum
from typing import Any, NamedTuple, TypeAlias

from sklearn.base import BaseEstimator


class DataKind(enum.Enum):
  """Column kinds understood by the text loader, as `pandas` dtypes."""

  TEXT = "str"
  BOOLEAN = "bool"
  SINGLE = "float32"
  DOUBLE = "float64"
  INT32 = "int32"
  INT64 = "int64"


class DefaultColumnNames:
  LABEL = "Label"
  FEATURES = "Features"
  SCORE = "Score"
  PROBABILITY = "Probability"
  PREDICTED_LABEL = "PredictedLabel"


class TextLoaderColumn(NamedTuple):
  """A named, typed column at a fixed position of a delimited text file."""

  name: str
  kind: DataKind
  index: int


class BinaryPrediction(NamedTuple):
  predicted_label: bool
  score: float
  probability: float


PipelineStep: TypeAlias = tuple[str, BaseEstimator]
PipelineSteps: TypeAlias = Sequence[PipelineStep]
Record: TypeAlias = Mapping[str, Any]
