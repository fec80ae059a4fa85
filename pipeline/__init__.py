"""Fluent Scikit-learn estimator chains for message spam detection."""

__all__ = [
  "context",
  "data",
  "estimator",
  "evaluation",
  "plots",
  "prediction",
  "schema",
  "trainers",
  "transformer_model",
  "transforms",
  "utils",
]
