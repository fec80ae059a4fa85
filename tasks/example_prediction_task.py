"""Predictions of the trained spam detection model for example messages."""

import logging
from pathlib import Path
from typing_extensions import override

import luigi
import pandas as pd

from pipeline.prediction import predict_default_cols
from tasks.spam_detection_task import SpamDetectionTask
from tasks.utils import load_model


logger = logging.getLogger(__name__)

EXAMPLE_MESSAGES = [
  "That's a great idea. It should work.",
  "free medicine winner! congratulations",
  "Yes we should meet over the weekend!",
  "you win pills and free entry vouchers",
]


class ExamplePredictionTask(luigi.Task):
  """Outputs spam predictions for a few hand-written messages.

  The examples carry no label, so their label text is left empty.
  """

  @override
  def requires(self):
    return SpamDetectionTask()

  @override
  def run(self):
    model = load_model(self.input().path)
    predictions = predict_default_cols(
      model,
      [{"LabelText": "", "Message": message}
       for message in EXAMPLE_MESSAGES],
    )
    for message, prediction in zip(EXAMPLE_MESSAGES, predictions):
      logger.info("%r: spam=%s, probability=%.3f", message,
                  prediction.predicted_label, prediction.probability)

    predictions_df = pd.DataFrame(predictions)
    predictions_df.insert(0, "message", EXAMPLE_MESSAGES)
    self.output().makedirs()
    predictions_df.to_csv(self.output().path, index=False)

  @override
  def output(self):
    return luigi.LocalTarget(
      Path() / "reports" / "example_predictions.csv"
    )
