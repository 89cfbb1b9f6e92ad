# File: tests/sizing/test_ordering.py
"""Tests for the upstream-to-downstream processing order."""

from src.sanitary_pipe_sizing.core.segment import Segment
from src.sanitary_pipe_sizing.sizing.ordering import (
    ELEVATION_ORDER_ASSUMPTION,
    build_sizing_order,
)


def _seg(segment_id, z_a, z_b):
    return Segment(id=segment_id, endpoint_a=(0, 0, z_a), endpoint_b=(1, 0, z_b))


class TestBuildSizingOrder:
    """Highest maximum elevation first."""

    def test_empty(self):
        assert build_sizing_order([]) == []

    def test_descending_elevation(self):
        segments = [_seg("low", 1, 0), _seg("high", 9, 10), _seg("mid", 5, 4)]
        ordered = build_sizing_order(segments)
        assert [s.id for s in ordered] == ["high", "mid", "low"]

    def test_uses_higher_endpoint(self):
        """A sloped segment ranks by its upper end."""
        segments = [_seg("a", 0, 6), _seg("b", 5, 5)]
        assert [s.id for s in build_sizing_order(segments)] == ["a", "b"]

    def test_ties_broken_by_id(self):
        """Equal elevations order the same way every time."""
        first = build_sizing_order([_seg("b", 5, 5), _seg("a", 5, 5)])
        second = build_sizing_order([_seg("a", 5, 5), _seg("b", 5, 5)])
        assert [s.id for s in first] == [s.id for s in second] == ["a", "b"]

    def test_mixed_id_types(self):
        """Integer and string ids can be ordered together."""
        ordered = build_sizing_order([_seg("x", 5, 5), _seg(12, 5, 5)])
        assert [s.id for s in ordered] == [12, "x"]

    def test_input_not_mutated(self):
        segments = [_seg("low", 1, 0), _seg("high", 10, 9)]
        build_sizing_order(segments)
        assert [s.id for s in segments] == ["low", "high"]

    def test_assumption_documented(self):
        assert "elevation" in ELEVATION_ORDER_ASSUMPTION
