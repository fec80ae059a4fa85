"""Implementation of dataset retrieval."""

import logging
from pathlib import Path

import luigi
import luigi.format
import requests
from typing_extensions import override


logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 60


class DatasetDownloadTask(luigi.Task):
  """Downloads a dataset archive from a URL to the local file system.

  Attributes:
    archive: File name of the archive, appended to `url`.
    folder: Local folder the archive is saved in.
    url: Base URL of the archive, ending with a slash.
  """

  archive = luigi.Parameter()
  folder = luigi.Parameter("data")
  url = luigi.Parameter()

  @override
  def run(self):
    logger.info("Downloading %s%s.", self.url, self.archive)
    response = requests.get(
      str(self.url) + str(self.archive), timeout=_TIMEOUT_SECONDS
    )
    response.raise_for_status()
    with self.output().open("w") as f:
      f.write(response.content)

  @override
  def output(self):
    return luigi.LocalTarget(
      Path() / str(self.folder) / str(self.archive),
      format=luigi.format.Nop,
    )
