"""Utilities for accessing Scikit-learn pipelines.

Fitted chains with a cache checkpoint nest their downstream steps in an
inner pipeline, always placed last, so the predictor is found by
descending into the last step.
"""

from sklearn.base import BaseEstimator
from sklearn.pipeline import Pipeline

from common.types import PipelineSteps


def get_predictor(model: Pipeline) -> BaseEstimator:
  predictor = model.steps[-1][1]
  if isinstance(predictor, Pipeline):
    return get_predictor(predictor)
  return predictor


def replace_predictor(model: Pipeline, predictor: BaseEstimator) -> Pipeline:
  """Returns a pipeline sharing all fitted steps of `model` but the last.

  `model` itself is left untouched.
  """
  name, last = model.steps[-1]
  if isinstance(last, Pipeline):
    predictor = replace_predictor(last, predictor)
  return Pipeline(
    list(model.steps[:-1]) + [(name, predictor)], memory=model.memory
  )


def flatten_steps(model: Pipeline) -> PipelineSteps:
  """Lists the steps of `model` in execution order, without nesting."""
  steps = []
  for name, step in model.steps:
    if isinstance(step, Pipeline):
      steps += flatten_steps(step)
    elif not isinstance(step, str):
      steps += [(name, step)]
  return steps
