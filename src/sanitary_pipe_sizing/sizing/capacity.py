# File: src/sanitary_pipe_sizing/sizing/capacity.py
"""
Minimum diameter resolution from DFU load, orientation and slope.

Per IPC:
- Vertical stacks: Table 710.1(1)
- Horizontal drains: Table 710.1(2), with §704.1 minimum slope fallback
- Horizontal branches: Table 703.2 clamp on top of the drain table
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.segment import Orientation
from .tables import DEFAULT_TABLES, CapacityTable, SizingTables

logger = logging.getLogger(__name__)


class CapacityResolver:
    """
    Resolves the code-minimum pipe diameter in inches.

    All lookups use the first table threshold not exceeded by the load.
    """

    def __init__(self, tables: Optional[SizingTables] = None):
        """
        Initialize the resolver.

        Args:
            tables: Rule set to resolve against (default IPC tables)
        """
        self.tables = tables or DEFAULT_TABLES

    @staticmethod
    def _lookup(table: CapacityTable, load_units: float) -> float:
        if load_units > table.max_load:
            logger.warning(
                f"{load_units} DFU exceeds {table.name} range, "
                f"using {table.overflow_diameter}\""
            )
        return table.lookup(load_units)

    def vertical_stack_diameter(self, load_units: float) -> float:
        """
        Diameter for a vertical stack.

        Args:
            load_units: DFU carried by the stack

        Returns:
            Diameter in inches; the overflow diameter above the table range
        """
        return self._lookup(self.tables.vertical, load_units)

    def horizontal_drain_diameter(self, load_units: float, slope: float) -> float:
        """
        Diameter for a horizontal drain.

        Below the minimum slope the table is bypassed and the fixed
        low-slope diameter is returned regardless of load.

        Args:
            load_units: DFU carried by the drain
            slope: Rise/run ratio

        Returns:
            Diameter in inches
        """
        if slope < self.tables.min_slope:
            logger.debug(
                f"Slope {slope:.4f} below minimum {self.tables.min_slope:.4f}, "
                f"using {self.tables.low_slope_diameter}\""
            )
            return self.tables.low_slope_diameter

        return self._lookup(self.tables.horizontal, load_units)

    def apply_branch_limits(self, load_units: float, current_diameter: float) -> float:
        """
        Clamp a horizontal diameter to the branch limit table.

        Args:
            load_units: DFU carried by the branch
            current_diameter: Diameter resolved from the drain table (inches)

        Returns:
            Smallest legal branch diameter >= current_diameter, or
            current_diameter unchanged when no entry qualifies
        """
        legal = self.tables.branch_limits.smallest_legal_diameter(
            load_units, current_diameter
        )
        if legal is None:
            return current_diameter
        if legal != current_diameter:
            logger.debug(
                f"Branch limit raised {current_diameter}\" to {legal}\" for {load_units} DFU"
            )
        return legal

    def resolve(
        self,
        load_units: float,
        orientation: Orientation,
        slope: float,
    ) -> float:
        """
        Resolve the minimum diameter for one segment.

        Args:
            load_units: DFU carried by the segment
            orientation: Vertical stack or horizontal drain
            slope: Rise/run ratio (ignored for vertical stacks)

        Returns:
            Diameter in inches
        """
        if orientation == Orientation.VERTICAL:
            return self.vertical_stack_diameter(load_units)

        diameter = self.horizontal_drain_diameter(load_units, slope)
        return self.apply_branch_limits(load_units, diameter)
