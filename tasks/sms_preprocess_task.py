"""Extraction of the SMS Spam Collection from its downloaded archive."""

from pathlib import Path
from typing_extensions import override
from zipfile import ZipFile

import luigi

from tasks.message_retrieval_task import DatasetDownloadTask


_ARCHIVE = "sms+spam+collection.zip"
_MEMBER = "SMSSpamCollection"
_URL = "https://archive.ics.uci.edu/static/public/228/"


def extract_spam_collection(zfile: ZipFile, destination: Path | str) -> int:
  """Copies the tab-separated message file out of `zfile`.

  Lines are copied unchanged except for line endings, which are
  normalized to `\\n`.

  Returns:
    The number of copied lines.
  """
  count = 0
  with (zfile.open(_MEMBER, mode="r") as source,
        open(destination, "w", encoding="utf-8", newline="\n") as target):
    for line in source:
      target.write(line.decode("utf-8").rstrip("\r\n") + "\n")
      count += 1
  return count


class SpamCollectionTask(luigi.Task):
  """Outputs the SMS Spam Collection as a text file.

  Every line holds a `ham`/`spam` label token and a message, separated
  by a tab. The `readme` file of the archive is skipped.
  """

  @override
  def requires(self):
    return DatasetDownloadTask(archive=_ARCHIVE, url=_URL)

  @override
  def run(self):
    self.output().makedirs()
    with ZipFile(self.input().path) as zfile:
      extract_spam_collection(zfile, self.output().path)

  @override
  def output(self):
    return luigi.LocalTarget(
      Path() / "data" / "SMSSpamCollection.txt"
    )
