"""Fluent construction of estimator chains.

An `EstimatorChain` is an immutable, ordered sequence of `Scikit-learn`
steps. An `EstimatorModel` binds a chain to a `Context`, so steps can be
appended through factories that draw them from the context's catalogs:

  model = (
    EstimatorModel.create(context)
    .append_by(lambda ctx: ctx.transforms.text.featurize_text(
      "Features", "Message"))
    .append_cache_checkpoint()
    .append_by(lambda ctx: ctx.binary_classification.trainers
               .sgd_calibrated())
  )
  trained_model = model.fit(training_data)
"""

from collections.abc import Callable, Iterator, Sequence
import dataclasses
import logging

import pandas as pd
from sklearn.base import BaseEstimator, clone
from sklearn.pipeline import Pipeline

from common.types import PipelineStep, PipelineSteps
from pipeline.context import Context
from pipeline.transformer_model import TransformerModel
from pipeline.transforms import CacheCheckpoint


logger = logging.getLogger(__name__)

_DOWNSTREAM = "Downstream"
_IDENTITY = "Identity"


def _to_pipeline(steps: PipelineSteps) -> Pipeline:
  for position, (name, estimator) in enumerate(steps):
    if isinstance(estimator, CacheCheckpoint):
      upstream, downstream = steps[:position], steps[position + 1:]
      if not upstream:
        return _to_pipeline(downstream)
      if all(isinstance(step, CacheCheckpoint) for _, step in downstream):
        return Pipeline(list(upstream))
      return Pipeline([
        (name, Pipeline(list(upstream))),
        (_DOWNSTREAM, _to_pipeline(downstream)),
      ], memory=estimator.memory)
  if not steps:
    return Pipeline([(_IDENTITY, "passthrough")])
  return Pipeline(list(steps))


class EstimatorChain:
  """An ordered, append-only chain of unfitted steps.

  Appending returns a new chain; existing chains are never modified.
  """

  def __init__(self, steps: Sequence[PipelineStep] = ()):
    names = [name for name, _ in steps]
    if len(set(names)) != len(names):
      raise ValueError(f"Step names must be unique, got {names}.")
    self._steps = tuple(steps)

  @property
  def steps(self) -> tuple[PipelineStep, ...]:
    return self._steps

  def __len__(self) -> int:
    return len(self._steps)

  def __iter__(self) -> Iterator[PipelineStep]:
    return iter(self._steps)

  def __repr__(self) -> str:
    return f"EstimatorChain({[name for name, _ in self._steps]})"

  def append(
    self,
    estimator: BaseEstimator,
    name: str | None = None,
  ) -> "EstimatorChain":
    if name is None:
      name = f"{len(self._steps):02d} {type(estimator).__name__}"
    return EstimatorChain(self._steps + ((name, estimator),))

  def append_cache_checkpoint(self, context: Context) -> "EstimatorChain":
    return self.append(CacheCheckpoint(context.memory))

  def fit(self, data: pd.DataFrame) -> Pipeline:
    """Fits clones of all steps in order, each on the previous output.

    Steps before a cache checkpoint are fitted as a single cached unit.

    Args:
      data: Training data, including the label column if a trainer
        is part of the chain.

    Returns:
      A fitted pipeline, the transformer chain.
    """
    steps = [
      (name, estimator if isinstance(estimator, CacheCheckpoint)
             else clone(estimator))
      for name, estimator in self._steps
    ]
    logger.info("Fitting %d step(s) on %d row(s).", len(steps), len(data))
    return _to_pipeline(steps).fit(data)


@dataclasses.dataclass(frozen=True)
class EstimatorModel:
  """An estimator chain bound to the context its steps are drawn from."""

  context: Context
  estimator_chain: EstimatorChain = dataclasses.field(
    default_factory=EstimatorChain
  )

  @classmethod
  def create(cls, context: Context) -> "EstimatorModel":
    return cls(context)

  def append_by(
    self,
    factory: Callable[[Context], BaseEstimator],
  ) -> "EstimatorModel":
    return dataclasses.replace(
      self, estimator_chain=self.estimator_chain.append(factory(self.context))
    )

  def append_cache_checkpoint(self) -> "EstimatorModel":
    return dataclasses.replace(
      self,
      estimator_chain=self.estimator_chain.append_cache_checkpoint(
        self.context
      ),
    )

  def fit(self, data: pd.DataFrame) -> TransformerModel:
    return TransformerModel(self.context, self.estimator_chain.fit(data))
