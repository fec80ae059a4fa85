"""Predictions for small in-memory sets of records."""

from collections.abc import Iterable

from common.types import BinaryPrediction, DefaultColumnNames, Record
from pipeline.data import load_from_records
from pipeline.transformer_model import TransformerModel


def predict_default_cols(
  model: TransformerModel,
  records: Iterable[Record],
) -> list[BinaryPrediction]:
  """Scores `records` and reads the default prediction columns.

  Args:
    model: A trained chain ending with a binary prediction step.
    records: Mappings holding every input column of the chain, the label
      column included even if its value is unknown.

  Returns:
    One prediction per record, in the order of `records`.
  """
  data = load_from_records(records)
  if data.empty:
    return []
  scored = model.transform(data)
  return [
    BinaryPrediction(bool(label), float(score), float(probability))
    for label, score, probability in zip(
      scored[DefaultColumnNames.PREDICTED_LABEL],
      scored[DefaultColumnNames.SCORE],
      scored[DefaultColumnNames.PROBABILITY],
    )
  ]
