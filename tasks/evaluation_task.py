"""Evaluation of the trained spam detection model on the test set."""

import dataclasses
import logging
from pathlib import Path
from typing_extensions import override

import luigi
import pandas as pd

from pipeline.evaluation import evaluate
from tasks.spam_detection_task import SpamDetectionTask
from tasks.train_test_split_task import TrainTestSplitTask
from tasks.utils import load_model, read_messages


logger = logging.getLogger(__name__)


class EvaluationTask(luigi.Task):
  """Outputs evaluation metrics of the spam detection model.

  Metrics are computed on messages held out from training, spam being
  the positive class.
  """

  @override
  def requires(self):
    return {
      "train_test_split": TrainTestSplitTask(),
      "model": SpamDetectionTask(),
    }

  @override
  def run(self):
    test_df = read_messages(self.input()["train_test_split"]["test"].path)
    model = load_model(self.input()["model"].path)
    evaluation_metrics = evaluate(model, test_df)
    logger.info("accuracy=%.3f, spam_precision=%.3f, spam_recall=%.3f",
                evaluation_metrics.accuracy,
                evaluation_metrics.positive_precision,
                evaluation_metrics.positive_recall)

    self.output().makedirs()
    pd.DataFrame([dataclasses.asdict(evaluation_metrics)]).to_csv(
      self.output().path, index=False
    )

  @override
  def output(self):
    return luigi.LocalTarget(
      Path() / "reports" / "evaluation_metrics.csv"
    )
