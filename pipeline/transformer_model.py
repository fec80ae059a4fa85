"""Trained estimator chains."""

import dataclasses

import pandas as pd
from sklearn.base import BaseEstimator
from sklearn.pipeline import Pipeline

from common.types import DefaultColumnNames, PipelineSteps
from pipeline.context import Context
from pipeline.schema import get_schema
from pipeline.trainers import (
  BinaryClassificationTrainer, BinaryPredictionTransformer
)
from pipeline.utils import flatten_steps, get_predictor, replace_predictor


@dataclasses.dataclass(frozen=True)
class TransformerModel:
  """A fitted transformer chain and the context it was built in.

  Attributes:
    context: The context shared by the chain's steps.
    transformer_chain: The fitted `Scikit-learn` pipeline.
  """

  context: Context
  transformer_chain: Pipeline

  @property
  def transformers(self) -> PipelineSteps:
    return flatten_steps(self.transformer_chain)

  @property
  def last_transformer(self) -> BaseEstimator:
    return get_predictor(self.transformer_chain)

  def transform(self, data: pd.DataFrame) -> pd.DataFrame:
    return self.transformer_chain.transform(data)

  def get_output_schema(self, data: pd.DataFrame) -> dict[str, str]:
    """Returns the schema of `data` after passing through the chain."""
    return get_schema(self.transform(data))

  def with_last_transformer(
    self,
    transformer: BaseEstimator,
  ) -> "TransformerModel":
    """Replaces the terminal step, reusing all upstream fitted steps."""
    return dataclasses.replace(
      self,
      transformer_chain=replace_predictor(self.transformer_chain, transformer),
    )

  def with_threshold(
    self,
    threshold: float,
    threshold_column_name: str = DefaultColumnNames.PROBABILITY,
  ) -> "TransformerModel":
    """Returns a model that labels rows using a different decision cutoff.

    The learned predictor of the terminal step is shared, not refitted.

    Args:
      threshold: The new decision cutoff.
      threshold_column_name: Column the cutoff is applied to, either
        `Score` or `Probability`.

    Raises:
      ValueError: The terminal step is not a binary prediction step.
    """
    last = self.last_transformer
    if isinstance(last, BinaryClassificationTrainer):
      model = last.model_
    elif isinstance(last, BinaryPredictionTransformer):
      model = last.model
    else:
      raise ValueError(
        f"Terminal step {type(last).__name__} does not predict "
        "binary labels."
      )
    return self.with_last_transformer(
      BinaryPredictionTransformer(
        model, feature_column_name=last.feature_column_name,
        threshold=threshold, threshold_column_name=threshold_column_name,
      )
    )
