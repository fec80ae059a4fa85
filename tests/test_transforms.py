"""Tests for column transforms."""

import numpy as np
import pandas as pd
import pytest
import scipy.sparse
import scipy.sparse.linalg
from sklearn.exceptions import NotFittedError

from common.errors import DomainError, SchemaError
from pipeline.schema import stack_vectors
from pipeline.transforms import FeaturizeText, ValueMap


@pytest.fixture
def label_map():
  """Create a ham/spam to boolean value map."""
  return ValueMap(["ham", "spam"], [False, True], "Label", "LabelText")


class TestValueMap:
  """Tests for ValueMap."""

  def test_maps_values(self, label_map, messages_df):
    """Test that every label text is mapped to its boolean."""
    mapped = label_map.fit_transform(messages_df)
    assert mapped.Label.dtype == bool
    assert (mapped.Label == (mapped.LabelText == "spam")).all()

  def test_keeps_input_columns(self, label_map, messages_df):
    """Test that mapping adds a column without dropping others."""
    mapped = label_map.fit_transform(messages_df)
    assert list(mapped.columns) == ["LabelText", "Message", "Label"]

  def test_does_not_modify_input(self, label_map, messages_df):
    """Test that the input frame is left untouched."""
    label_map.fit_transform(messages_df)
    assert "Label" not in messages_df.columns

  def test_unknown_value_at_transform_maps_to_default(
    self, label_map, messages_df
  ):
    """Test that unlabeled rows are mapped to the default value."""
    label_map.fit(messages_df)
    mapped = label_map.transform(
      pd.DataFrame([{"LabelText": "", "Message": "hello"}])
    )
    assert mapped.Label.tolist() == [False]

  def test_unknown_value_at_fit_fails(self, label_map):
    """Test that values outside the keys are rejected while fitting."""
    with pytest.raises(DomainError):
      label_map.fit(pd.DataFrame({"LabelText": ["ham", "eggs"]}))

  def test_key_value_count_mismatch(self, messages_df):
    """Test that keys and values must pair up."""
    with pytest.raises(ValueError):
      ValueMap(["ham", "spam"], [False], "Label", "LabelText").fit(
        messages_df
      )

  def test_missing_input_column(self, label_map):
    """Test that an absent input column is a schema error."""
    with pytest.raises(SchemaError):
      label_map.fit(pd.DataFrame({"Message": ["hello"]}))

  def test_transform_before_fit(self, label_map, messages_df):
    """Test that transforming requires fitting first."""
    with pytest.raises(NotFittedError):
      label_map.transform(messages_df)


class TestFeaturizeText:
  """Tests for FeaturizeText."""

  def test_adds_vector_column(self, messages_df):
    """Test that one sparse row vector is produced per message."""
    featurized = FeaturizeText("Features", "Message").fit_transform(
      messages_df
    )
    assert len(featurized.Features) == len(messages_df)
    assert all(scipy.sparse.issparse(row) for row in featurized.Features)
    assert len({row.shape for row in featurized.Features}) == 1

  def test_rows_are_normalized(self, messages_df):
    """Test that every feature vector has unit length."""
    featurized = FeaturizeText("Features", "Message").fit_transform(
      messages_df
    )
    norms = scipy.sparse.linalg.norm(stack_vectors(featurized.Features),
                                     axis=1)
    np.testing.assert_allclose(norms, 1.0, rtol=1e-6)

  def test_output_column_is_default_input(self):
    """Test that the output column is featurized in place by default."""
    data = pd.DataFrame({"Message": ["free cash", "see you soon"]})
    featurized = FeaturizeText("Message").fit_transform(data)
    assert list(featurized.columns) == ["Message"]
    assert scipy.sparse.issparse(featurized.Message.iloc[0])

  def test_unseen_text_uses_fitted_vocabulary(self, messages_df):
    """Test that new text is featurized with the fitted vocabulary."""
    featurize_text = FeaturizeText("Features", "Message").fit(messages_df)
    fitted_size = featurize_text.transform(messages_df).Features.iloc[0].shape
    unseen = featurize_text.transform(
      pd.DataFrame({"Message": ["completely unseen words"]})
    )
    assert unseen.Features.iloc[0].shape == fitted_size

  def test_missing_input_column(self, messages_df):
    """Test that an absent input column is a schema error."""
    with pytest.raises(SchemaError):
      FeaturizeText("Features", "Body").fit(messages_df)
