# File: src/sanitary_pipe_sizing/sizer.py
"""
Sanitary pipe sizing pass.

Runs the sizing rule engine once over a segment set:
1. Order segments upstream to downstream (highest elevation first)
2. Classify each segment as vertical stack or horizontal drain
3. Resolve the code-minimum diameter (IPC 710.1(1), 710.1(2), 703.2, §704.1)
4. Enforce no reduction in flow direction (IPC §710.1.8)
5. Write every final diameter in one all-or-nothing transaction
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config.sizing_config import SizingConfig
from .config.units import ProjectUnits, convert_from_inches
from .core.network import SegmentNetwork
from .core.segment import Orientation, Segment, SegmentId
from .host.writer import ResultWriter, SegmentResultWriter
from .sizing.capacity import CapacityResolver
from .sizing.flow_enforcer import enforce_sequence
from .sizing.ordering import build_sizing_order
from .sizing.orientation import classify_segment

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class SegmentSizing:
    """
    Sizing decision for one segment.

    Attributes:
        segment_id: Id of the sized segment
        order_index: Position in the processing order
        orientation: Vertical stack or horizontal drain
        load_units: DFU carried
        slope: Slope used (default substituted when missing)
        table_diameter_in: Diameter from the capacity rules, inches
        own_diameter: table_diameter_in in the project length unit
        final_diameter: Diameter after the no-reduction rule
        written: Whether the writer accepted the assignment
    """
    segment_id: SegmentId
    order_index: int
    orientation: Orientation
    load_units: float
    slope: float
    table_diameter_in: float
    own_diameter: float
    final_diameter: float
    written: bool = False

    @property
    def raised_by_upstream(self) -> bool:
        """True if the no-reduction rule increased the diameter."""
        return self.final_diameter > self.own_diameter

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "segment_id": self.segment_id,
            "order_index": self.order_index,
            "orientation": self.orientation.value,
            "load_units": self.load_units,
            "slope": self.slope,
            "table_diameter_in": self.table_diameter_in,
            "own_diameter": self.own_diameter,
            "final_diameter": self.final_diameter,
            "raised_by_upstream": self.raised_by_upstream,
            "written": self.written,
        }


@dataclass
class SizingResult:
    """
    Result of one sizing pass.

    Attributes:
        records: Sizing decisions in processing order
        skipped: Ids of segments below the minimum load
        not_written: Ids of segments whose diameter was not writable
        duplicates: Ids repeated in the input; only the first is sized
        committed: Whether the write transaction was committed
        errors: Failures that caused a rollback
        length_units: Unit of own/final diameters
    """
    records: List[SegmentSizing] = field(default_factory=list)
    skipped: List[SegmentId] = field(default_factory=list)
    not_written: List[SegmentId] = field(default_factory=list)
    duplicates: List[SegmentId] = field(default_factory=list)
    committed: bool = False
    errors: List[str] = field(default_factory=list)
    length_units: ProjectUnits = ProjectUnits.FEET

    @property
    def count_sized(self) -> int:
        """Segments whose diameter was actually assigned."""
        if not self.committed:
            return 0
        return sum(1 for record in self.records if record.written)

    @property
    def diameters(self) -> Dict[SegmentId, float]:
        """Final diameter by segment id, for written segments."""
        if not self.committed:
            return {}
        return {r.segment_id: r.final_diameter for r in self.records if r.written}

    def summary(self) -> str:
        """One-line message for the host UI."""
        return f"Finished sizing {self.count_sized} sanitary pipe(s)."

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "count_sized": self.count_sized,
            "committed": self.committed,
            "length_units": self.length_units.value,
            "records": [r.to_dict() for r in self.records],
            "skipped": list(self.skipped),
            "not_written": list(self.not_written),
            "duplicates": list(self.duplicates),
            "errors": list(self.errors),
            "summary": self.summary(),
        }

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


# =============================================================================
# Sizer
# =============================================================================

class SanitaryPipeSizer:
    """
    Sizes sanitary drainage segments from DFU load and orientation.

    Per-pass state (the running maximum diameter) lives only inside
    ``plan``; the sizer itself holds configuration only and can be reused.
    """

    def __init__(
        self,
        config: Optional[SizingConfig] = None,
        resolver: Optional[CapacityResolver] = None,
    ):
        """
        Initialize the sizer.

        Args:
            config: Sizing settings (default IPC tables, feet)
            resolver: Capacity resolver (default built from config.tables)
        """
        self.config = config or SizingConfig()
        self.resolver = resolver or CapacityResolver(self.config.tables)

    def plan(self, segments: Iterable[Segment]) -> Tuple[List[SegmentSizing], List[SegmentId]]:
        """
        Compute final diameters without writing anything.

        Segments repeating an earlier id are ignored; the first one is sized.

        Args:
            segments: Segments to size, in any order

        Returns:
            Tuple of (sizing records in processing order, skipped segment ids)
        """
        segments = list(segments)
        network = SegmentNetwork(segments, tolerance=self.config.connection_tolerance)
        logger.debug(
            f"Sizing {len(network)} segments in {len(network.connected_groups())} drainage networks"
        )

        records: List[SegmentSizing] = []
        skipped: List[SegmentId] = []

        for index, segment in enumerate(build_sizing_order(network.segments.values())):
            if segment.load_units < self.config.min_load_units:
                # Dry or uninitialized pipe
                logger.debug(f"Segment {segment.id}: {segment.load_units} DFU, skipping")
                skipped.append(segment.id)
                continue

            slope = segment.slope if segment.slope is not None else self.config.default_slope
            orientation = classify_segment(segment, network)
            table_diameter = self.resolver.resolve(segment.load_units, orientation, slope)
            records.append(SegmentSizing(
                segment_id=segment.id,
                order_index=index,
                orientation=orientation,
                load_units=segment.load_units,
                slope=slope,
                table_diameter_in=table_diameter,
                own_diameter=convert_from_inches(table_diameter, self.config.length_units),
                final_diameter=0.0,
            ))

        finals, _ = enforce_sequence(record.own_diameter for record in records)
        for record, final_diameter in zip(records, finals):
            record.final_diameter = final_diameter
            logger.debug(
                f"Segment {record.segment_id}: {record.orientation.value}, "
                f"{record.load_units} DFU, table {record.table_diameter_in}\", "
                f"final {final_diameter:.4f} {self.config.length_units.value}"
            )

        return records, skipped

    def size(
        self,
        segments: Iterable[Segment],
        writer: Optional[ResultWriter] = None,
    ) -> SizingResult:
        """
        Size segments and write the results in one transaction.

        Args:
            segments: Segments to size, in any order
            writer: Result writer (default applies to the Segment records)

        Returns:
            SizingResult; count_sized is 0 if the transaction was rolled back
        """
        segments = list(segments)
        writer = writer or SegmentResultWriter()
        by_id: Dict[SegmentId, Segment] = {}
        duplicates: List[SegmentId] = []
        for segment in segments:
            if segment.id in by_id:
                duplicates.append(segment.id)
            else:
                by_id[segment.id] = segment

        records, skipped = self.plan(segments)
        result = SizingResult(
            records=records,
            skipped=skipped,
            duplicates=duplicates,
            length_units=self.config.length_units,
        )

        if duplicates:
            logger.warning(f"Duplicate segment ids ignored: {duplicates}")

        writer.begin()
        try:
            for record in records:
                record.written = writer.write(by_id[record.segment_id], record.final_diameter)
                if not record.written:
                    result.not_written.append(record.segment_id)
            writer.commit()
            result.committed = True
        except Exception as e:
            writer.rollback()
            for record in records:
                record.written = False
            result.errors.append(f"Sizing pass rolled back: {e}")
            logger.exception("Sizing pass rolled back")
            return result

        logger.info(
            f"Sized {result.count_sized} of {len(segments)} segments "
            f"({len(skipped)} skipped, {len(result.not_written)} not writable)"
        )
        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def size_sanitary_segments(
    segments: Iterable[Segment],
    config: Optional[SizingConfig] = None,
    writer: Optional[ResultWriter] = None,
) -> int:
    """
    Size segments and return the number whose diameter was assigned.

    Args:
        segments: Segments to size
        config: Sizing settings
        writer: Result writer (default applies to the Segment records)

    Returns:
        Count of sized segments
    """
    return SanitaryPipeSizer(config).size(segments, writer).count_sized
