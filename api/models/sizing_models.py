from pydantic import BaseModel, Field, conlist, field_validator
from typing import List, Dict, Any, Optional, Union, Literal

from src.sanitary_pipe_sizing.core.segment import Segment

SegmentIdValue = Union[int, str]
PointValue = conlist(float, min_length=3, max_length=3)
EndpointPairValue = conlist(PointValue, min_length=2, max_length=2)


class SegmentInput(BaseModel):
    """One drainage segment submitted for sizing."""
    id: SegmentIdValue = Field(description="Unique segment identifier")
    endpoint_a: List[float] = Field(
        description="First endpoint [x, y, z] in project length units",
        min_length=3,
        max_length=3
    )
    endpoint_b: List[float] = Field(
        description="Second endpoint [x, y, z] in project length units",
        min_length=3,
        max_length=3
    )
    load_units: float = Field(
        default=0.0,
        description="Drainage fixture units carried; 0 skips the segment",
        ge=0
    )
    slope: Optional[float] = Field(
        default=None,
        description="Rise/run ratio; minimum code slope when omitted"
    )
    diameter: Optional[float] = Field(
        default=None,
        description="Current diameter in project length units"
    )
    neighbor_ids: List[SegmentIdValue] = Field(
        default=[],
        description="Ids of connected segments; shared endpoints are used when empty"
    )
    neighbor_endpoints: List[EndpointPairValue] = Field(
        default=[],
        description="Endpoint pairs [[x, y, z], [x, y, z]] of connected pipes captured from the host model"
    )
    read_only: bool = Field(
        default=False,
        description="Whether the diameter may not be written"
    )

    @field_validator('slope')
    @classmethod
    def validate_slope(cls, v: Optional[float]) -> Optional[float]:
        """Slopes are rise/run ratios, not percentages or angles."""
        if v is not None and not 0 <= v <= 1:
            raise ValueError("Slope must be a rise/run ratio between 0 and 1")
        return v

    def to_segment(self) -> Segment:
        """Convert to the sizing engine's Segment record."""
        return Segment(
            id=self.id,
            endpoint_a=tuple(self.endpoint_a),
            endpoint_b=tuple(self.endpoint_b),
            load_units=self.load_units,
            slope=self.slope,
            diameter=self.diameter,
            neighbor_ids=list(self.neighbor_ids),
            neighbor_endpoints=[(pair[0], pair[1]) for pair in self.neighbor_endpoints],
        )


class SizingRequest(BaseModel):
    """Input data model for a sizing pass."""
    segments: List[SegmentInput] = Field(
        description="Segments to size, in any order"
    )
    config: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Sizing config overrides (length_units, min_load_units, tables, ...)"
    )


class SegmentSizingOutput(BaseModel):
    """Sizing decision for one segment."""
    segment_id: SegmentIdValue
    order_index: int
    orientation: Literal["vertical", "horizontal"]
    load_units: float
    slope: float
    table_diameter_in: float
    own_diameter: float
    final_diameter: float
    raised_by_upstream: bool
    written: bool


class SegmentOutput(BaseModel):
    """Segment after sizing."""
    id: SegmentIdValue
    load_units: float
    diameter: Optional[float] = None


class SizingResponse(BaseModel):
    """Result of a sizing pass."""
    count_sized: int
    committed: bool
    length_units: str
    segments: List[SegmentOutput]
    records: List[SegmentSizingOutput]
    skipped: List[SegmentIdValue]
    not_written: List[SegmentIdValue]
    summary: str
