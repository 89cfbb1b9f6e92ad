# tests/conftest.py
import sys
import os

# Add project root and src directory to path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, PROJECT_ROOT)
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))

import pytest

from src.sanitary_pipe_sizing.core.segment import Segment


def _make_segment(segment_id, start, end, load_units=0.0, slope=None, **kwargs):
    """Build a Segment from plain tuples."""
    return Segment(
        id=segment_id,
        endpoint_a=start,
        endpoint_b=end,
        load_units=load_units,
        slope=slope,
        **kwargs
    )


@pytest.fixture
def stack_and_drain():
    """
    Two vertical stack pieces draining into a horizontal run.

    s1 (z 10 -> 9, 40 DFU) and s2 (z 9 -> 8, 100 DFU) form a stack; s3 is a
    horizontal drain at z 5 with 5 DFU at 1/4" per foot. Connectivity comes
    from host-captured neighbor endpoints so that s1 and s2 see a vertical
    neighbor while s3 sees only horizontal ones.
    """
    vertical_neighbor = ((0.0, 0.0, 9.0), (0.0, 0.0, 8.0))
    horizontal_neighbor = ((8.0, 0.0, 5.0), (16.0, 0.0, 5.0))
    return [
        _make_segment(
            "s3", (0, 0, 5), (8, 0, 5), load_units=5, slope=0.02,
            neighbor_endpoints=[horizontal_neighbor],
        ),
        _make_segment(
            "s1", (0, 0, 10), (0, 0, 9), load_units=40,
            neighbor_endpoints=[vertical_neighbor],
        ),
        _make_segment(
            "s2", (0, 0, 9), (0, 0, 8), load_units=100,
            neighbor_endpoints=[((0.0, 0.0, 10.0), (0.0, 0.0, 9.0))],
        ),
    ]
