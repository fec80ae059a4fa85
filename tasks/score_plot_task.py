"""Charts of the spam detection model's scores on the full dataset."""

from pathlib import Path
from typing_extensions import override

import luigi

from pipeline.plots import save_label_distribution, save_score_histograms
from tasks.sms_preprocess_task import SpamCollectionTask
from tasks.spam_detection_task import SpamDetectionTask
from tasks.utils import load_model, load_spam_collection


class ScorePlotTask(luigi.Task):
  """Outputs the label distribution and score histograms of all messages.

  The histograms show how far apart the model places ham and spam and
  whether the default decision threshold suits imbalanced labels.
  """

  @override
  def requires(self):
    return {
      "spam_collection": SpamCollectionTask(),
      "model": SpamDetectionTask(),
    }

  @override
  def run(self):
    messages_df = load_spam_collection(self.input()["spam_collection"].path)
    model = load_model(self.input()["model"].path)
    scored_df = model.transform(messages_df)

    output = self.output()
    output["label_distribution"].makedirs()
    save_label_distribution(scored_df, output["label_distribution"].path)
    save_score_histograms(scored_df, output["score_histograms"].path)

  @override
  def output(self):
    return {
      "label_distribution":
        luigi.LocalTarget(Path() / "figures" / "label_distribution.png"),
      "score_histograms":
        luigi.LocalTarget(Path() / "figures" / "score_histograms.png"),
    }
