"""Implementation of the spam detection estimator chain and its training."""

import logging
from pathlib import Path

import luigi
from typing_extensions import override

from common.types import DefaultColumnNames
from pipeline.context import Context
from pipeline.estimator import EstimatorModel
from tasks.train_test_split_task import TrainTestSplitTask
from tasks.utils import create_context, read_messages, save_model


logger = logging.getLogger(__name__)


def build_estimator_model(context: Context) -> EstimatorModel:
  """Returns the untrained spam detection chain.

  The chain converts the `ham`/`spam` label text to a boolean label,
  featurizes the message text and trains a calibrated linear classifier.
  Featurized messages are cached before the trainer, so the chain can be
  trained again without featurizing the same messages twice.
  """
  return (
    EstimatorModel.create(context)
    .append_by(lambda ctx: ctx.transforms.conversion.value_map(
      ["ham", "spam"], [False, True],
      DefaultColumnNames.LABEL, "LabelText",
    ))
    .append_by(lambda ctx: ctx.transforms.text.featurize_text(
      DefaultColumnNames.FEATURES, "Message"
    ))
    .append_cache_checkpoint()
    .append_by(lambda ctx: ctx.binary_classification.trainers.sgd_calibrated(
      DefaultColumnNames.LABEL, DefaultColumnNames.FEATURES
    ))
  )


class SpamDetectionTask(luigi.Task):
  """Outputs a trained spam detection model."""

  @override
  def requires(self):
    return TrainTestSplitTask()

  @override
  def run(self):
    train_df = read_messages(self.input()["train"].path)
    estimator_model = build_estimator_model(create_context())
    logger.info("Training %s.", estimator_model.estimator_chain)
    trained_model = estimator_model.fit(train_df)

    self.output().makedirs()
    save_model(trained_model, self.output().path)

  @override
  def output(self):
    return luigi.LocalTarget(
      Path() / "models" / "spam_detection_model.pkl"
    )
