"""Charts of scored message data and threshold sweeps."""

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from common.types import DefaultColumnNames
from pipeline.schema import check_columns


_HISTOGRAM_BINS = 40
_LABEL_NAMES = {False: "Ham", True: "Spam"}


def save_label_distribution(
  scored_data: pd.DataFrame,
  filename: Path | str,
  label_column_name: str = DefaultColumnNames.LABEL,
) -> None:
  check_columns(scored_data, [label_column_name], "Label distribution")
  counts = scored_data[label_column_name].value_counts().sort_index()
  fig, ax = plt.subplots(figsize=(6, 6))
  ax.pie(
    counts.to_numpy(),
    labels=[_LABEL_NAMES.get(label, str(label)) for label in counts.index],
    autopct="%1.1f%%", startangle=90,
    wedgeprops={"width": 0.4},
  )
  ax.set_title("Label distribution")
  fig.savefig(fname=filename)
  plt.close(fig)


def save_score_histograms(
  scored_data: pd.DataFrame,
  filename: Path | str,
  label_column_name: str = DefaultColumnNames.LABEL,
) -> None:
  """Stacks histograms of probabilities and scores, split by label."""
  columns = [DefaultColumnNames.PROBABILITY, DefaultColumnNames.SCORE]
  check_columns(scored_data, [label_column_name] + columns,
                "Score histograms")
  fig, axes = plt.subplots(nrows=len(columns), figsize=(10, 8))
  for ax, column in zip(axes, columns):
    for label, group in scored_data.groupby(label_column_name):
      ax.hist(group[column], bins=_HISTOGRAM_BINS, alpha=0.6,
              label=_LABEL_NAMES.get(label, str(label)))  # type: ignore
    ax.set(xlabel=column, ylabel="messages")
    ax.set_yscale("log")
    ax.legend(loc="upper center")
  fig.tight_layout()
  fig.savefig(fname=filename)
  plt.close(fig)


def save_threshold_sweep(
  sweep: pd.DataFrame,
  filename: Path | str,
) -> None:
  """Plots accuracy, spam precision and spam recall per threshold."""
  check_columns(
    sweep,
    ["threshold", "accuracy", "positive_precision", "positive_recall"],
    "Threshold sweep",
  )
  fig, ax = plt.subplots(figsize=(10, 6))
  for column, name in [("accuracy", "accuracy"),
                       ("positive_precision", "spam precision"),
                       ("positive_recall", "spam recall")]:
    ax.plot(sweep.threshold, sweep[column], marker="o", label=name)
  ax.set(xlabel="probability threshold", ylabel="score", ylim=[0, 1.05])
  ax.set_title("Scores of the spam classifier per decision threshold")
  ax.legend(loc="lower left")
  fig.savefig(fname=filename)
  plt.close(fig)
