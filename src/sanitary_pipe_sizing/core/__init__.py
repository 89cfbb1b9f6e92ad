# File: src/sanitary_pipe_sizing/core/__init__.py
"""
Core data model for drainage pipe sizing.

Provides the Segment record, the Orientation enum and the SegmentNetwork
connectivity index used by the sizing engine.
"""

from .segment import (
    Orientation,
    Point3D,
    Segment,
    SegmentId,
    endpoint_deltas,
)
from .network import DEFAULT_CONNECTION_TOLERANCE, SegmentNetwork

__all__ = [
    "Orientation",
    "Point3D",
    "Segment",
    "SegmentId",
    "endpoint_deltas",
    "DEFAULT_CONNECTION_TOLERANCE",
    "SegmentNetwork",
]
