# File: tests/core/test_segment.py
"""Tests for the Segment record."""

import pytest
from src.sanitary_pipe_sizing.core.segment import (
    Orientation,
    Segment,
    endpoint_deltas,
)


class TestSegmentConstruction:
    """Test Segment normalization on construction."""

    def test_endpoints_normalized_to_float_tuples(self):
        """List endpoints become float tuples."""
        seg = Segment(id="s1", endpoint_a=[0, 1, 2], endpoint_b=[3, 4, 5])
        assert seg.endpoint_a == (0.0, 1.0, 2.0)
        assert seg.endpoint_b == (3.0, 4.0, 5.0)

    def test_dict_endpoints_accepted(self):
        """Endpoints can be given as x/y/z dicts."""
        seg = Segment(
            id=1,
            endpoint_a={"x": 1, "y": 2, "z": 3},
            endpoint_b={"x": 4, "y": 5, "z": 6},
        )
        assert seg.endpoint_a == (1.0, 2.0, 3.0)

    def test_wrong_coordinate_count_rejected(self):
        """Endpoints need exactly three coordinates."""
        with pytest.raises(ValueError):
            Segment(id="s1", endpoint_a=[0, 0], endpoint_b=[0, 0, 1])

    def test_negative_load_rejected(self):
        """Loads are non-negative."""
        with pytest.raises(ValueError, match="non-negative"):
            Segment(id="s1", endpoint_a=(0, 0, 0), endpoint_b=(1, 0, 0), load_units=-1)

    def test_missing_load_defaults_to_zero(self):
        """None load is treated as no load."""
        seg = Segment(id="s1", endpoint_a=(0, 0, 0), endpoint_b=(1, 0, 0), load_units=None)
        assert seg.load_units == 0.0

    @pytest.mark.parametrize("load", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_load_is_no_load(self, load):
        seg = Segment(id="s1", endpoint_a=(0, 0, 0), endpoint_b=(1, 0, 0), load_units=load)
        assert seg.load_units == 0.0

    def test_defaults(self):
        """Optional fields default to unsized sanitary."""
        seg = Segment(id="s1", endpoint_a=(0, 0, 0), endpoint_b=(1, 0, 0))
        assert seg.slope is None
        assert seg.diameter is None
        assert seg.neighbor_ids == []
        assert seg.neighbor_endpoints == []
        assert seg.system_type == "Sanitary"


class TestSegmentGeometry:
    """Test elevation and delta helpers."""

    def test_elevation_is_highest_z(self):
        """Elevation uses the higher endpoint regardless of order."""
        seg = Segment(id="s1", endpoint_a=(0, 0, 3), endpoint_b=(0, 0, 7))
        assert seg.elevation == 7.0

    def test_deltas_are_absolute(self):
        """Deltas ignore endpoint order."""
        seg = Segment(id="s1", endpoint_a=(5, 2, 1), endpoint_b=(1, 4, 0))
        assert seg.deltas() == (4.0, 2.0, 1.0)

    def test_endpoint_deltas(self):
        assert endpoint_deltas((0, 0, 0), (-1, 2, -3)) == (1, 2, 3)

    def test_orientation_values(self):
        """Orientation serializes to lowercase strings."""
        assert Orientation.VERTICAL.value == "vertical"
        assert Orientation.HORIZONTAL.value == "horizontal"


class TestSegmentSerialization:
    """Test to_dict / from_dict."""

    def test_from_dict_minimal(self):
        """Only id and endpoints are required."""
        seg = Segment.from_dict({
            "id": "s1",
            "endpoint_a": [0, 0, 10],
            "endpoint_b": [0, 0, 9],
        })
        assert seg.load_units == 0.0
        assert seg.slope is None

    def test_round_trip_keeps_neighbor_endpoints(self):
        """Host-captured neighbor endpoints survive serialization."""
        seg = Segment(
            id=42,
            endpoint_a=(0, 0, 10),
            endpoint_b=(0, 0, 9),
            load_units=12.5,
            slope=0.02,
            neighbor_ids=[43],
            neighbor_endpoints=[((0, 0, 9), (0, 0, 8))],
            metadata={"level": "L2"},
        )
        restored = Segment.from_dict(seg.to_dict())
        assert restored == seg

    def test_to_dict_omits_empty_optional_sections(self):
        """Empty neighbor endpoints and metadata are left out."""
        data = Segment(id="s1", endpoint_a=(0, 0, 0), endpoint_b=(1, 0, 0)).to_dict()
        assert "neighbor_endpoints" not in data
        assert "metadata" not in data
