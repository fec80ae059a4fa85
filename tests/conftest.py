"""Shared pytest fixtures for test suite."""

import itertools

import matplotlib
import pandas as pd
import pytest

from common.types import DefaultColumnNames
from pipeline.context import Context
from pipeline.estimator import EstimatorModel

matplotlib.use("Agg")


_HAM_MESSAGES = [
  "See you at lunch tomorrow",
  "Can we meet over the weekend?",
  "I will call you when I get home",
  "Thanks for dinner, it was lovely",
  "Are you coming to the office today?",
  "Mum says the train is late again",
  "Let me know when you are free to talk",
  "Ok lar, see you at the cinema",
  "Sorry I missed your call, in a meeting",
  "Happy birthday! Have a great day",
]

_SPAM_MESSAGES = [
  "WINNER! Claim your free cash prize now",
  "Free entry to win a luxury holiday, text WIN",
  "Congratulations you won free vouchers, call now",
  "URGENT! Your mobile won a cash prize, claim today",
  "Free pills and medicine, order now and win",
]


@pytest.fixture
def context(tmp_path):
  """Create a seeded context caching into a temporary folder."""
  return Context(seed=1, cache_location=tmp_path / "cache")


@pytest.fixture
def messages_df():
  """Create a small labeled corpus, two ham messages per spam message."""
  rows = [{"LabelText": "ham", "Message": message}
          for message in itertools.chain(_HAM_MESSAGES, _HAM_MESSAGES)]
  rows += [{"LabelText": "spam", "Message": message}
           for message in itertools.chain(_SPAM_MESSAGES, _SPAM_MESSAGES)]
  return pd.DataFrame(rows).sample(frac=1.0, random_state=7)


def append_spam_steps(model: EstimatorModel) -> EstimatorModel:
  return (
    model
    .append_by(lambda ctx: ctx.transforms.conversion.value_map(
      ["ham", "spam"], [False, True],
      DefaultColumnNames.LABEL, "LabelText",
    ))
    .append_by(lambda ctx: ctx.transforms.text.featurize_text(
      DefaultColumnNames.FEATURES, "Message"
    ))
  )


@pytest.fixture
def estimator_model(context):
  """Create the spam chain: label mapping, featurization and trainer."""
  return append_spam_steps(EstimatorModel.create(context)).append_by(
    lambda ctx: ctx.binary_classification.trainers.sgd_calibrated()
  )


@pytest.fixture
def trained_model(estimator_model, messages_df):
  """Fit the spam chain on the whole corpus."""
  return estimator_model.fit(messages_df)
