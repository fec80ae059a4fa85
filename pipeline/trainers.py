"""Binary classification trainers as part of a Scikit-learn pipeline."""

from typing import Any

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, ClassifierMixin, TransformerMixin
from sklearn.exceptions import NotFittedError
from sklearn.linear_model import LogisticRegression, SGDClassifier
from sklearn.utils.validation import check_is_fitted
from typing_extensions import override

from common.errors import DomainError
from common.types import DefaultColumnNames
from pipeline.schema import check_columns, stack_vectors


def _score(
  data: pd.DataFrame,
  model: ClassifierMixin,
  feature_column_name: str,
  threshold: float,
  threshold_column_name: str,
  step_name: str,
) -> pd.DataFrame:
  check_columns(data, [feature_column_name], step_name)
  if threshold_column_name not in (DefaultColumnNames.SCORE,
                                   DefaultColumnNames.PROBABILITY):
    raise ValueError(
      f"Cannot threshold on column '{threshold_column_name}'."
    )
  features = stack_vectors(data[feature_column_name])
  scores = model.decision_function(features)  # type: ignore
  positive = list(model.classes_).index(True)  # type: ignore
  probabilities = model.predict_proba(features)[:, positive]  # type: ignore
  scored = data.assign(**{
    DefaultColumnNames.SCORE:
      pd.Series(scores.astype(np.float32), index=data.index),
    DefaultColumnNames.PROBABILITY:
      pd.Series(probabilities.astype(np.float32), index=data.index),
  })
  return scored.assign(**{
    DefaultColumnNames.PREDICTED_LABEL:
      scored[threshold_column_name] > threshold
  })


class BinaryClassificationTrainer(BaseEstimator, TransformerMixin):
  """Base class for trainers of binary classifiers over a vector column.

  Subclasses provide the `Scikit-learn` predictor through
  `_create_predictor`. Once fitted, the trainer scores data by adding
  three columns:
    - `Score`: the raw decision function value;
    - `Probability`: the positive-class probability;
    - `PredictedLabel`: *True* when the threshold column exceeds
      `threshold`.

  The label column must be boolean, *True* marking the positive class.
  """

  def __init__(
    self,
    label_column_name: str = DefaultColumnNames.LABEL,
    feature_column_name: str = DefaultColumnNames.FEATURES,
    seed: int | None = None,
    threshold: float = 0.0,
    threshold_column_name: str = DefaultColumnNames.SCORE,
  ):
    self.label_column_name = label_column_name
    self.feature_column_name = feature_column_name
    self.seed = seed
    self.threshold = threshold
    self.threshold_column_name = threshold_column_name

  def fit(
    self,
    X: pd.DataFrame,
    y: Any = None,
  ) -> "BinaryClassificationTrainer":
    step_name = type(self).__name__
    check_columns(
      X, [self.label_column_name, self.feature_column_name], step_name
    )
    labels = X[self.label_column_name]
    if not pd.api.types.is_bool_dtype(labels):
      raise DomainError(
        f"{step_name} requires a boolean label column, "
        f"'{self.label_column_name}' is of type '{labels.dtype}'."
      )
    predictor = self._create_predictor()
    predictor.fit(stack_vectors(X[self.feature_column_name]),
                  labels.to_numpy())
    self.model_ = predictor
    return self

  def transform(self, X: pd.DataFrame) -> pd.DataFrame:
    check_is_fitted(self)
    return _score(X, self.model_, self.feature_column_name,
                  self.threshold, self.threshold_column_name,
                  type(self).__name__)

  def _create_predictor(self) -> ClassifierMixin:
    raise NotImplementedError


class SgdCalibratedTrainer(BinaryClassificationTrainer):
  """Trains a linear model via stochastic gradient descent on `log loss`.

  `Log loss` makes the model's probabilities calibrated by construction.
  """

  def __init__(
    self,
    label_column_name: str = DefaultColumnNames.LABEL,
    feature_column_name: str = DefaultColumnNames.FEATURES,
    seed: int | None = None,
    threshold: float = 0.0,
    threshold_column_name: str = DefaultColumnNames.SCORE,
    alpha: float = 1e-4,
    max_iter: int = 1000,
  ):
    super().__init__(
      label_column_name=label_column_name,
      feature_column_name=feature_column_name,
      seed=seed,
      threshold=threshold,
      threshold_column_name=threshold_column_name,
    )
    self.alpha = alpha
    self.max_iter = max_iter

  @override
  def _create_predictor(self) -> ClassifierMixin:
    return SGDClassifier(
      loss="log_loss", alpha=self.alpha, max_iter=self.max_iter,
      shuffle=True, random_state=self.seed,
    )


class LbfgsLogisticRegressionTrainer(BinaryClassificationTrainer):
  """Trains a `logistic regression` model with the `L-BFGS` solver."""

  def __init__(
    self,
    label_column_name: str = DefaultColumnNames.LABEL,
    feature_column_name: str = DefaultColumnNames.FEATURES,
    seed: int | None = None,
    threshold: float = 0.0,
    threshold_column_name: str = DefaultColumnNames.SCORE,
    l2_regularization: float = 1.0,
    max_iter: int = 100,
  ):
    super().__init__(
      label_column_name=label_column_name,
      feature_column_name=feature_column_name,
      seed=seed,
      threshold=threshold,
      threshold_column_name=threshold_column_name,
    )
    self.l2_regularization = l2_regularization
    self.max_iter = max_iter

  @override
  def _create_predictor(self) -> ClassifierMixin:
    return LogisticRegression(
      C=1.0 / self.l2_regularization, solver="lbfgs",
      max_iter=self.max_iter, random_state=self.seed,
    )


class BinaryPredictionTransformer(BaseEstimator, TransformerMixin):
  """Scores data with an already fitted binary predictor.

  Used to swap the decision threshold of a trained chain without fitting
  its predictor again.

  Attributes:
    model: A fitted `Scikit-learn` binary classifier.
    feature_column_name: Name of the vector column with features.
    threshold: Decision cutoff applied to `threshold_column_name`.
    threshold_column_name: Either `Score` or `Probability`.
  """

  def __init__(
    self,
    model: ClassifierMixin,
    feature_column_name: str = DefaultColumnNames.FEATURES,
    threshold: float = 0.0,
    threshold_column_name: str = DefaultColumnNames.SCORE,
  ):
    self.model = model
    self.feature_column_name = feature_column_name
    self.threshold = threshold
    self.threshold_column_name = threshold_column_name

  def fit(
    self,
    X: pd.DataFrame,
    y: Any = None,
  ) -> "BinaryPredictionTransformer":
    return self

  def transform(self, X: pd.DataFrame) -> pd.DataFrame:
    return _score(X, self.model, self.feature_column_name,
                  self.threshold, self.threshold_column_name,
                  type(self).__name__)

  def __sklearn_is_fitted__(self) -> bool:
    try:
      check_is_fitted(self.model)
    except NotFittedError:
      return False
    return True
