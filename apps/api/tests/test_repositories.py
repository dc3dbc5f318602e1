"""
Repository Tests - sampling point conversion without a database
"""

import math

import pytest

from src.domain.errors import InvalidCoordinate
from src.domain.services import build_sample_set
from src.infrastructure.models import SpatialFeatureModel
from src.infrastructure.repositories import SQLAlchemySampleRepository


def make_point(coordinates=(106.8, -6.2), metadata=None, geometry=None) -> SpatialFeatureModel:
    return SpatialFeatureModel(
        layer_type="valid_sampling_point",
        geometry=geometry if geometry is not None else {"type": "Point", "coordinates": list(coordinates)},
        feature_metadata=metadata,
        survey_id="survey-1",
        user_id="user-1",
    )


@pytest.fixture
def repo():
    return SQLAlchemySampleRepository(session=None)


class TestSampleConversion:
    """Tests for reading sampling point features into raw samples."""

    def test_coordinates_from_geometry(self, repo):
        sample = repo._to_sample(make_point((106.81, -6.21), {"depth_value": -3.5}))

        assert sample == {"x": 106.81, "y": -6.21, "depth": -3.5}

    def test_depth_value_preferred_over_kedalaman(self, repo):
        sample = repo._to_sample(make_point(metadata={"depth_value": -2.0, "kedalaman": -9.0}))

        assert sample["depth"] == -2.0

    def test_kedalaman_used_without_depth_value(self, repo):
        sample = repo._to_sample(make_point(metadata={"kedalaman": "-4.5"}))

        assert sample["depth"] == -4.5

    def test_non_numeric_depth_value_falls_through(self, repo):
        sample = repo._to_sample(make_point(metadata={"depth_value": "abc", "kedalaman": -1.25}))

        assert sample["depth"] == -1.25

    @pytest.mark.parametrize("metadata", [None, {}, {"other": 1}])
    def test_missing_depth_is_nan(self, repo, metadata):
        sample = repo._to_sample(make_point(metadata=metadata))

        assert math.isnan(sample["depth"])

    def test_missing_depth_discarded_by_validation(self, repo):
        raw = [
            repo._to_sample(make_point((0.0, 0.0), {"depth_value": -1})),
            repo._to_sample(make_point((1.0, 0.0), {"depth_value": -2})),
            repo._to_sample(make_point((0.0, 1.0), {"kedalaman": -3})),
            repo._to_sample(make_point((1.0, 1.0), {})),
        ]

        sample_set = build_sample_set(raw)

        assert len(sample_set) == 3
        assert sample_set.discarded == 1

    @pytest.mark.parametrize("geometry", [{}, {"type": "Point"}, {"type": "Point", "coordinates": []}])
    def test_missing_geometry_rejected(self, repo, geometry):
        raw = [
            repo._to_sample(make_point((0.0, 0.0), {"depth_value": -1})),
            repo._to_sample(make_point((1.0, 0.0), {"depth_value": -2})),
            repo._to_sample(make_point(metadata={"depth_value": -3}, geometry=geometry)),
        ]

        assert raw[2]["x"] is None

        with pytest.raises(InvalidCoordinate) as exc_info:
            build_sample_set(raw)

        assert exc_info.value.field == "x"
        assert exc_info.value.index == 2
