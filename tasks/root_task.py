"""Implementation of tasks which depend on all other Luigi tasks."""

from typing_extensions import override

import luigi

from tasks.evaluation_task import EvaluationTask
from tasks.example_prediction_task import ExamplePredictionTask
from tasks.score_plot_task import ScorePlotTask
from tasks.spam_detection_task import SpamDetectionTask
from tasks.threshold_sweep_task import ThresholdSweepTask
from tasks.train_test_split_task import TrainTestSplitTask


class RootTask(luigi.Task):
  """Depends on all other `Luigi` tasks."""

  @override
  def requires(self):
    return [
      TrainTestSplitTask(),
      SpamDetectionTask(),
      EvaluationTask(),
      ExamplePredictionTask(),
      ScorePlotTask(),
      ThresholdSweepTask(),
    ]
