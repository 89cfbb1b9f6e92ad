# File: src/sanitary_pipe_sizing/sizing/__init__.py
"""
Sizing rule engine.

Components:
- tables: IPC capacity, branch limit and slope constants
- CapacityResolver: load/orientation/slope -> minimum diameter
- Orientation classification from neighbor shapes
- Elevation-based processing order
- FlowState accumulator for the no-reduction rule
"""

from .tables import (
    MIN_DRAIN_SLOPE,
    LOW_SLOPE_DIAMETER,
    CapacityTable,
    BranchLimitTable,
    SizingTables,
    VERTICAL_STACK_TABLE,
    HORIZONTAL_DRAIN_TABLE,
    BRANCH_LIMIT_TABLE,
    DEFAULT_TABLES,
)
from .capacity import CapacityResolver
from .orientation import is_vertical_shape, classify_orientation, classify_segment
from .ordering import ELEVATION_ORDER_ASSUMPTION, build_sizing_order
from .flow_enforcer import FlowState, enforce_no_reduction, enforce_sequence

__all__ = [
    "MIN_DRAIN_SLOPE",
    "LOW_SLOPE_DIAMETER",
    "CapacityTable",
    "BranchLimitTable",
    "SizingTables",
    "VERTICAL_STACK_TABLE",
    "HORIZONTAL_DRAIN_TABLE",
    "BRANCH_LIMIT_TABLE",
    "DEFAULT_TABLES",
    "CapacityResolver",
    "is_vertical_shape",
    "classify_orientation",
    "classify_segment",
    "ELEVATION_ORDER_ASSUMPTION",
    "build_sizing_order",
    "FlowState",
    "enforce_no_reduction",
    "enforce_sequence",
]
