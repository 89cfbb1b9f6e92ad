# File: src/sanitary_pipe_sizing/sizing/orientation.py
"""
Vertical stack / horizontal drain classification.

A segment is classified from the shape of its neighbors, not its own
geometry: if any connected segment runs mostly along Z, the segment is
treated as part of a vertical stack. A vertical segment whose neighbors are
all horizontal is therefore classified HORIZONTAL. Segments without
neighbors default to HORIZONTAL.
"""

from typing import Iterable, Tuple

from ..core.network import SegmentNetwork
from ..core.segment import Orientation, Point3D, Segment, endpoint_deltas


def is_vertical_shape(start: Point3D, end: Point3D) -> bool:
    """True if the Z delta dominates both the X and Y deltas."""
    dx, dy, dz = endpoint_deltas(start, end)
    return dz > dx and dz > dy


def classify_orientation(
    neighbor_endpoints: Iterable[Tuple[Point3D, Point3D]]
) -> Orientation:
    """
    Classify a segment from its neighbors' endpoint pairs.

    Args:
        neighbor_endpoints: (endpoint_a, endpoint_b) of each connected segment,
            excluding the segment being classified

    Returns:
        Orientation.VERTICAL if any neighbor is vertically shaped,
        Orientation.HORIZONTAL otherwise
    """
    for start, end in neighbor_endpoints:
        if is_vertical_shape(start, end):
            return Orientation.VERTICAL
    return Orientation.HORIZONTAL


def classify_segment(segment: Segment, network: SegmentNetwork) -> Orientation:
    """Classify ``segment`` using its neighbors in ``network``."""
    return classify_orientation(network.neighbor_endpoints(segment))
