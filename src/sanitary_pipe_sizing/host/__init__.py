# File: src/sanitary_pipe_sizing/host/__init__.py
"""
Host model integration (Revit via Rhino.Inside.Revit).

- selector: Revit pipes -> Segment records
- writer: all-or-nothing diameter write-back
"""

from .selector import (
    DEFAULT_PARAMETER_KEYS,
    select_sanitary_segments,
    get_pipe_system_type,
    get_pipe_endpoints,
    get_connected_pipes,
    get_connected_pipe_ids,
    get_connected_pipe_endpoints,
    get_element_id,
)
from .writer import (
    ResultWriter,
    SegmentResultWriter,
    RevitParameterWriter,
    get_element_parameter,
)

__all__ = [
    "DEFAULT_PARAMETER_KEYS",
    "select_sanitary_segments",
    "get_pipe_system_type",
    "get_pipe_endpoints",
    "get_connected_pipes",
    "get_connected_pipe_ids",
    "get_connected_pipe_endpoints",
    "get_element_id",
    "ResultWriter",
    "SegmentResultWriter",
    "RevitParameterWriter",
    "get_element_parameter",
]
