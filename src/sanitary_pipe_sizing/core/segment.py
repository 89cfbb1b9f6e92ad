# File: src/sanitary_pipe_sizing/core/segment.py
"""
Drainage segment representation for pipe sizing.

A Segment is one straight pipe run between two 3D endpoints, carrying a
drainage fixture unit (DFU) load. The sizing engine only ever mutates the
``diameter`` field; everything else is read from the host model.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

Point3D = Tuple[float, float, float]
SegmentId = Union[str, int]


class Orientation(Enum):
    """Hydraulic role of a segment in the drainage network."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


def endpoint_deltas(start: Point3D, end: Point3D) -> Tuple[float, float, float]:
    """Absolute (dx, dy, dz) between two endpoints."""
    return (
        abs(start[0] - end[0]),
        abs(start[1] - end[1]),
        abs(start[2] - end[2]),
    )


def _to_point(value: Any) -> Point3D:
    """Accept [x, y, z] lists or {"x", "y", "z"} dicts."""
    if isinstance(value, dict):
        return (
            float(value.get("x", 0.0)),
            float(value.get("y", 0.0)),
            float(value.get("z", 0.0)),
        )
    if len(value) != 3:
        raise ValueError(f"Endpoint must have 3 coordinates, got {len(value)}")
    return (float(value[0]), float(value[1]), float(value[2]))


@dataclass
class Segment:
    """
    A single drainage pipe segment.

    Attributes:
        id: Opaque unique identifier (host element id or any hashable label)
        endpoint_a: First endpoint (x, y, z)
        endpoint_b: Second endpoint (x, y, z)
        load_units: Drainage fixture units carried; 0 means inactive/unsized
        slope: Rise/run ratio, None when the host did not supply one
        diameter: Resolved diameter in the endpoint length unit (output)
        neighbor_ids: Ids of segments connected at either endpoint
        neighbor_endpoints: Endpoint pairs of connected pipes captured from
            the host, including pipes outside the sizing set
        system_type: Host piping system classification
        metadata: Additional host data carried through serialization
    """
    id: SegmentId
    endpoint_a: Point3D
    endpoint_b: Point3D
    load_units: float = 0.0
    slope: Optional[float] = None
    diameter: Optional[float] = None
    neighbor_ids: List[SegmentId] = field(default_factory=list)
    neighbor_endpoints: List[Tuple[Point3D, Point3D]] = field(default_factory=list)
    system_type: str = "Sanitary"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Normalize endpoints, zero undeterminable loads and reject negative ones."""
        self.endpoint_a = _to_point(self.endpoint_a)
        self.endpoint_b = _to_point(self.endpoint_b)
        self.neighbor_endpoints = [
            (_to_point(start), _to_point(end)) for start, end in self.neighbor_endpoints
        ]
        self.load_units = float(self.load_units or 0.0)
        if not math.isfinite(self.load_units):
            self.load_units = 0.0
        if self.load_units < 0:
            raise ValueError(
                f"Segment {self.id}: load_units must be non-negative, got {self.load_units}"
            )

    @property
    def elevation(self) -> float:
        """Highest Z of the two endpoints."""
        return max(self.endpoint_a[2], self.endpoint_b[2])

    @property
    def endpoints(self) -> Tuple[Point3D, Point3D]:
        return self.endpoint_a, self.endpoint_b

    def deltas(self) -> Tuple[float, float, float]:
        """Absolute (dx, dy, dz) between this segment's endpoints."""
        return endpoint_deltas(self.endpoint_a, self.endpoint_b)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            "id": self.id,
            "endpoint_a": list(self.endpoint_a),
            "endpoint_b": list(self.endpoint_b),
            "load_units": self.load_units,
            "slope": self.slope,
            "diameter": self.diameter,
            "neighbor_ids": list(self.neighbor_ids),
            "system_type": self.system_type,
        }
        if self.neighbor_endpoints:
            data["neighbor_endpoints"] = [
                [list(start), list(end)] for start, end in self.neighbor_endpoints
            ]
        if self.metadata:
            data["metadata"] = self.metadata
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Segment':
        """Create from dictionary."""
        slope = data.get("slope")
        diameter = data.get("diameter")
        return cls(
            id=data["id"],
            endpoint_a=data["endpoint_a"],
            endpoint_b=data["endpoint_b"],
            load_units=data.get("load_units", 0.0),
            slope=float(slope) if slope is not None else None,
            diameter=float(diameter) if diameter is not None else None,
            neighbor_ids=list(data.get("neighbor_ids", [])),
            neighbor_endpoints=[
                (pair[0], pair[1]) for pair in data.get("neighbor_endpoints", [])
            ],
            system_type=data.get("system_type", "Sanitary"),
            metadata=data.get("metadata", {}),
        )
