"""Utilities supporting implementation of Luigi tasks."""

from pathlib import Path
import pickle

import pandas as pd

from common.config import checkpoint, misc
from common.types import DataKind, TextLoaderColumn
from pipeline.context import Context
from pipeline.data import load_from_text_file
from pipeline.transformer_model import TransformerModel


SPAM_COLLECTION_COLUMNS = [
  TextLoaderColumn("LabelText", DataKind.TEXT, 0),
  TextLoaderColumn("Message", DataKind.TEXT, 1),
]


def create_context() -> Context:
  """Returns a context seeded and cached as configured in `luigi.cfg`."""
  return Context(
    seed=misc().random_seed,  # type: ignore
    cache_location=checkpoint().location,  # type: ignore
  )


def load_spam_collection(path: Path | str) -> pd.DataFrame:
  """Loads tab-separated `ham`/`spam` labels and messages without header.

  Args:
    path: Path to a file in the format of the `SMS Spam Collection`.

  Returns:
    A data frame with the `LabelText` and `Message` text columns.
  """
  return load_from_text_file(path, SPAM_COLLECTION_COLUMNS,
                             has_header=False, separator="\t")


def read_messages(path: Path | str) -> pd.DataFrame:
  return pd.read_csv(path, dtype=str, keep_default_na=False)


def save_model(model: TransformerModel, path: Path | str) -> None:
  with open(path, "wb") as f:
    pickle.dump(model, f)


def load_model(path: Path | str) -> TransformerModel:
  with open(path, "rb") as f:
    return pickle.load(f)
