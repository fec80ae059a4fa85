"""Evaluation of the spam detection model over decision thresholds."""

import logging
from pathlib import Path
from typing_extensions import override

import luigi

from common.config import threshold
from pipeline.evaluation import sweep_thresholds, threshold_range
from pipeline.plots import save_threshold_sweep
from tasks.spam_detection_task import SpamDetectionTask
from tasks.train_test_split_task import TrainTestSplitTask
from tasks.utils import load_model, read_messages


logger = logging.getLogger(__name__)


class ThresholdSweepTask(luigi.Task):
  """Outputs test scores of the spam detection model per threshold.

  For every probability threshold in the range set in `luigi.cfg`, the
  trained model's terminal step is replaced by one labeling with that
  threshold. The featurization steps are reused as trained.
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
    config = threshold()
    sweep_df = sweep_thresholds(
      model, test_df,
      threshold_range(config.start, config.stop, config.step),  # type: ignore
    )
    best = sweep_df.loc[sweep_df.accuracy.idxmax()]
    logger.info("Best accuracy %.3f at threshold %.2f.",
                best.accuracy, best.threshold)

    output = self.output()
    output["threshold_sweep"].makedirs()
    output["threshold_sweep_figure"].makedirs()
    sweep_df.to_csv(output["threshold_sweep"].path, index=False)
    save_threshold_sweep(sweep_df, output["threshold_sweep_figure"].path)

  @override
  def output(self):
    return {
      "threshold_sweep":
        luigi.LocalTarget(Path() / "reports" / "threshold_sweep.csv"),
      "threshold_sweep_figure":
        luigi.LocalTarget(Path() / "figures" / "threshold_sweep.png"),
    }
