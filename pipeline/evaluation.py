"""Evaluation of trained binary classification chains."""

from collections.abc import Iterable
import dataclasses

import numpy as np
import pandas as pd
from sklearn import metrics

from common.types import DefaultColumnNames
from pipeline.schema import check_columns
from pipeline.transformer_model import TransformerModel


@dataclasses.dataclass(frozen=True)
class BinaryClassificationMetrics:
  accuracy: float
  area_under_roc_curve: float
  f1_score: float
  positive_precision: float
  positive_recall: float
  negative_precision: float
  negative_recall: float
  log_loss: float


def compute_metrics(
  scored_data: pd.DataFrame,
  label_column_name: str = DefaultColumnNames.LABEL,
) -> BinaryClassificationMetrics:
  """Computes binary classification metrics of already scored data.

  `Spam` is the positive class, so the positive precision favors messages
  that are not wrongly flagged.

  Raises:
    SchemaError: A label or scoring column is missing.
    ValueError: The labels contain a single class only, which leaves
      the area under the ROC curve undefined.
  """
  check_columns(
    scored_data,
    [label_column_name, DefaultColumnNames.PREDICTED_LABEL,
     DefaultColumnNames.SCORE, DefaultColumnNames.PROBABILITY],
    "Evaluation",
  )
  y_true = scored_data[label_column_name].to_numpy(dtype=bool)
  y_pred = scored_data[DefaultColumnNames.PREDICTED_LABEL].to_numpy(
    dtype=bool
  )
  report = metrics.classification_report(
    y_true, y_pred,
    labels=[False, True], target_names=["Ham", "Spam"],
    output_dict=True, zero_division=0.0,
  )
  return BinaryClassificationMetrics(
    accuracy=float(metrics.accuracy_score(y_true, y_pred)),
    area_under_roc_curve=float(metrics.roc_auc_score(
      y_true, scored_data[DefaultColumnNames.SCORE]
    )),
    f1_score=float(report["Spam"]["f1-score"]),  # type: ignore
    positive_precision=float(report["Spam"]["precision"]),  # type: ignore
    positive_recall=float(report["Spam"]["recall"]),  # type: ignore
    negative_precision=float(report["Ham"]["precision"]),  # type: ignore
    negative_recall=float(report["Ham"]["recall"]),  # type: ignore
    log_loss=float(metrics.log_loss(
      y_true,
      scored_data[DefaultColumnNames.PROBABILITY].to_numpy(dtype=np.float64),
      labels=[False, True],
    )),
  )


def evaluate(
  model: TransformerModel,
  data: pd.DataFrame,
  label_column_name: str = DefaultColumnNames.LABEL,
) -> BinaryClassificationMetrics:
  return compute_metrics(model.transform(data), label_column_name)


def threshold_range(
  start: float = -0.05,
  stop: float = 0.95,
  step: float = 0.05,
) -> list[float]:
  """Returns thresholds from `start` to `stop`, both inclusive."""
  if step <= 0:
    raise ValueError("Threshold step must be a positive number.")
  return [float(threshold) for threshold
          in np.round(np.arange(start, stop + step / 2, step), 10)]


def sweep_thresholds(
  model: TransformerModel,
  data: pd.DataFrame,
  thresholds: Iterable[float],
  label_column_name: str = DefaultColumnNames.LABEL,
) -> pd.DataFrame:
  """Evaluates `model` on `data` for every probability threshold.

  Upstream steps transform `data` once per threshold, the cost being
  the same as scoring with separately trained models would have, but
  no step is fitted again.

  Returns:
    One row per threshold with `accuracy`, `positive_precision`,
    `positive_recall` and `positive_count`, the number of rows labeled
    as positive.
  """
  rows = []
  for threshold in thresholds:
    scored = model.with_threshold(threshold).transform(data)
    threshold_metrics = compute_metrics(scored, label_column_name)
    rows += [{
      "threshold": threshold,
      "accuracy": threshold_metrics.accuracy,
      "positive_precision": threshold_metrics.positive_precision,
      "positive_recall": threshold_metrics.positive_recall,
      "positive_count":
        int(scored[DefaultColumnNames.PREDICTED_LABEL].sum()),
    }]
  return pd.DataFrame(
    rows,
    columns=["threshold", "accuracy", "positive_precision",
             "positive_recall", "positive_count"],
  )
