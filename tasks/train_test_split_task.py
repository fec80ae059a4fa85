"""Message dataset splitting into training and test subsets."""

import logging
from pathlib import Path

import luigi
from typing_extensions import override

from common.config import data
from tasks.sms_preprocess_task import SpamCollectionTask
from tasks.utils import create_context, load_spam_collection


logger = logging.getLogger(__name__)


class TrainTestSplitTask(luigi.Task):
  """Outputs a training set and a test set out of the SMS Spam Collection.

  The fraction of messages kept for testing is set in `luigi.cfg`,
  the split is seeded by the context.
  """

  @override
  def requires(self):
    return SpamCollectionTask()

  @override
  def run(self):
    context = create_context()
    messages_df = load_spam_collection(self.input().path)
    split = context.data.train_test_split(
      messages_df, test_fraction=data().test_fraction  # type: ignore
    )
    logger.info("Split %d message(s) into %d for training and %d for testing.",
                len(messages_df), len(split.training_data),
                len(split.test_data))

    output = self.output()
    for target in output.values():
      target.makedirs()
    split.training_data.to_csv(output["train"].path, index=False)
    split.test_data.to_csv(output["test"].path, index=False)

  @override
  def output(self):
    return {
      "train": luigi.LocalTarget(
        Path() / "data" / "train_messages.csv"
      ),
      "test": luigi.LocalTarget(
        Path() / "data" / "test_messages.csv"
      ),
    }
