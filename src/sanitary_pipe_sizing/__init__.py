# File: src/sanitary_pipe_sizing/__init__.py
"""
Sanitary drainage pipe sizing.

Sizes sanitary pipe networks from drainage fixture unit (DFU) loads using
the IPC capacity tables, minimum slope rule, branch limits and the
no-reduction-in-flow-direction rule.

Example:
    >>> from src.sanitary_pipe_sizing import Segment, SanitaryPipeSizer
    >>>
    >>> segments = [
    ...     Segment(id="s1", endpoint_a=(0, 0, 10), endpoint_b=(0, 0, 9), load_units=40),
    ... ]
    >>> result = SanitaryPipeSizer().size(segments)
    >>> print(result.summary())
"""

from .core import Orientation, Segment, SegmentNetwork
from .config import ProjectUnits, SizingConfig, SizingConfigError, load_sizing_config
from .sizing import CapacityResolver, SizingTables, DEFAULT_TABLES
from .host import (
    ResultWriter,
    SegmentResultWriter,
    RevitParameterWriter,
    select_sanitary_segments,
)
from .sizer import (
    SanitaryPipeSizer,
    SegmentSizing,
    SizingResult,
    size_sanitary_segments,
)

__version__ = "0.1.0"

__all__ = [
    "Orientation",
    "Segment",
    "SegmentNetwork",
    "ProjectUnits",
    "SizingConfig",
    "SizingConfigError",
    "load_sizing_config",
    "CapacityResolver",
    "SizingTables",
    "DEFAULT_TABLES",
    "ResultWriter",
    "SegmentResultWriter",
    "RevitParameterWriter",
    "select_sanitary_segments",
    "SanitaryPipeSizer",
    "SegmentSizing",
    "SizingResult",
    "size_sanitary_segments",
]
