# File: src/sanitary_pipe_sizing/sizing/tables.py
"""
IPC drainage capacity tables.

Each table is an explicit ordered sequence of (threshold, value) pairs.
Lookups are a stable ascending scan: the first entry whose threshold is not
exceeded wins. There is no nearest-match or interpolation.

Tables:
    - IPC Table 710.1(1): maximum DFU for vertical stacks
    - IPC Table 710.1(2): maximum DFU for horizontal drains
    - IPC Table 703.2: maximum DFU on horizontal branches
    - IPC §704.1: minimum slope (1/8" per foot)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ..utils.logging_config import TRACE_LEVEL

logger = logging.getLogger(__name__)

TableEntry = Tuple[float, float]

# 1/8" per foot, in rise/run
MIN_DRAIN_SLOPE = 0.0104

# Diameter (inches) used when a horizontal drain is below the minimum slope
LOW_SLOPE_DIAMETER = 4.0


def _validate_entries(name: str, entries: Sequence[TableEntry]) -> Tuple[TableEntry, ...]:
    """Check a table is non-empty with strictly ascending keys."""
    if not entries:
        raise ValueError(f"Table '{name}' has no entries")
    normalized = tuple((float(key), float(value)) for key, value in entries)
    for (prev_key, _), (key, _) in zip(normalized, normalized[1:]):
        if key <= prev_key:
            raise ValueError(
                f"Table '{name}' keys must be strictly ascending ({prev_key} then {key})"
            )
    return normalized


@dataclass(frozen=True)
class CapacityTable:
    """
    Load threshold to diameter table.

    Attributes:
        name: Table name for logging and reports
        entries: Ordered (max_load, diameter_in) pairs
        overflow_diameter: Diameter returned when the load exceeds every threshold
    """
    name: str
    entries: Tuple[TableEntry, ...]
    overflow_diameter: float

    def __post_init__(self):
        object.__setattr__(self, "entries", _validate_entries(self.name, self.entries))

    def first_not_exceeded(self, load: float) -> Optional[float]:
        """Diameter of the first entry with ``load <= threshold``, or None."""
        for threshold, diameter in self.entries:
            logger.log(TRACE_LEVEL, f"{self.name}: {load} DFU against {threshold} ({diameter}\")")
            if load <= threshold:
                return diameter
        return None

    def lookup(self, load: float) -> float:
        """Diameter for ``load``, falling back to the overflow diameter."""
        diameter = self.first_not_exceeded(load)
        return self.overflow_diameter if diameter is None else diameter

    @property
    def max_load(self) -> float:
        return self.entries[-1][0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "entries": [list(entry) for entry in self.entries],
            "overflow_diameter": self.overflow_diameter,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CapacityTable':
        return cls(
            name=data["name"],
            entries=tuple(tuple(entry) for entry in data["entries"]),
            overflow_diameter=float(data["overflow_diameter"]),
        )


@dataclass(frozen=True)
class BranchLimitTable:
    """
    Diameter to maximum branch load table.

    Attributes:
        name: Table name for logging and reports
        entries: Ordered (diameter_in, max_load) pairs
    """
    name: str
    entries: Tuple[TableEntry, ...]

    def __post_init__(self):
        object.__setattr__(self, "entries", _validate_entries(self.name, self.entries))

    def smallest_legal_diameter(self, load: float, current_diameter: float) -> Optional[float]:
        """
        Smallest diameter >= ``current_diameter`` whose ceiling carries ``load``.

        Returns:
            The qualifying diameter, or None when no entry qualifies
        """
        for diameter, max_load in self.entries:
            logger.log(TRACE_LEVEL, f"{self.name}: {load} DFU against {diameter}\" (max {max_load})")
            if load <= max_load and diameter >= current_diameter:
                return diameter
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "entries": [list(entry) for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BranchLimitTable':
        return cls(
            name=data["name"],
            entries=tuple(tuple(entry) for entry in data["entries"]),
        )


# IPC Table 710.1(1). The 15" overflow is a placeholder, not a code value.
VERTICAL_STACK_TABLE = CapacityTable(
    name="IPC 710.1(1) vertical stack",
    entries=(
        (2, 1.5), (4, 2), (6, 2.5), (12, 3), (42, 4),
        (72, 5), (120, 6), (250, 8), (500, 10), (840, 12),
    ),
    overflow_diameter=15.0,
)

# IPC Table 710.1(2). The 4" overflow reverts to a small size; kept literally.
HORIZONTAL_DRAIN_TABLE = CapacityTable(
    name="IPC 710.1(2) horizontal drain",
    entries=(
        (3, 1.5), (6, 2), (9, 2.5), (12, 3), (26, 4),
        (50, 5), (75, 6), (150, 8), (216, 10), (300, 12), (575, 15),
    ),
    overflow_diameter=4.0,
)

# IPC Table 703.2
BRANCH_LIMIT_TABLE = BranchLimitTable(
    name="IPC 703.2 horizontal branch",
    entries=(
        (1.5, 3), (2.0, 6), (2.5, 9), (3.0, 20), (4.0, 160),
        (5.0, 360), (6.0, 620), (8.0, 1400), (10.0, 2500),
    ),
)


@dataclass(frozen=True)
class SizingTables:
    """
    The complete rule set for one plumbing code variant.

    Attributes:
        vertical: Vertical stack capacity table
        horizontal: Horizontal drain capacity table
        branch_limits: Horizontal branch limit table
        min_slope: Slope below which horizontal drains get ``low_slope_diameter``
        low_slope_diameter: Fixed diameter for under-sloped drains (inches)
    """
    vertical: CapacityTable = VERTICAL_STACK_TABLE
    horizontal: CapacityTable = HORIZONTAL_DRAIN_TABLE
    branch_limits: BranchLimitTable = BRANCH_LIMIT_TABLE
    min_slope: float = MIN_DRAIN_SLOPE
    low_slope_diameter: float = LOW_SLOPE_DIAMETER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertical": self.vertical.to_dict(),
            "horizontal": self.horizontal.to_dict(),
            "branch_limits": self.branch_limits.to_dict(),
            "min_slope": self.min_slope,
            "low_slope_diameter": self.low_slope_diameter,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SizingTables':
        """Build tables from a dict, keeping defaults for missing keys."""
        defaults = cls()
        return cls(
            vertical=(
                CapacityTable.from_dict(data["vertical"])
                if "vertical" in data else defaults.vertical
            ),
            horizontal=(
                CapacityTable.from_dict(data["horizontal"])
                if "horizontal" in data else defaults.horizontal
            ),
            branch_limits=(
                BranchLimitTable.from_dict(data["branch_limits"])
                if "branch_limits" in data else defaults.branch_limits
            ),
            min_slope=float(data.get("min_slope", defaults.min_slope)),
            low_slope_diameter=float(
                data.get("low_slope_diameter", defaults.low_slope_diameter)
            ),
        )


DEFAULT_TABLES = SizingTables()
