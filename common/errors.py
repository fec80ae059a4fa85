"""Errors raised by pipeline steps when data does not fit a step."""


class SchemaError(KeyError):
  """A step requires a column that is absent at its position in a chain."""

  def __str__(self) -> str:
    return str(self.args[0]) if self.args else ""


class DomainError(ValueError):
  """A step received values outside of its declared domain."""
