# File: src/sanitary_pipe_sizing/host/selector.py
"""
Sanitary segment extraction from Revit pipes.

This module converts Revit Pipe elements (as seen through Rhino.Inside.Revit)
into Segment records for the sizing engine. It handles:
- System type filtering (Sanitary only by default)
- LocationCurve endpoint access
- DFU and slope parameter reads with missing-value defaults
- Connectivity through ConnectorManager / AllRefs

All Revit access goes through getattr chains so the module imports and runs
without the Revit API; tests pass small mock classes.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from ..core.segment import Point3D, Segment, SegmentId
from .writer import get_element_parameter

logger = logging.getLogger(__name__)

# Parameter names used when BuiltInParameter values are not supplied
DEFAULT_PARAMETER_KEYS: Dict[str, Any] = {
    "load_units": "Fixture Units",
    "slope": "Slope",
    "diameter": "Diameter",
}


def select_sanitary_segments(
    elements: Iterable[Any],
    system_types: Sequence[str] = ("Sanitary",),
    parameter_keys: Optional[Dict[str, Any]] = None,
) -> Tuple[List[Segment], Dict[SegmentId, Any]]:
    """
    Extract sanitary Segments from Revit pipe elements.

    Args:
        elements: Selected Revit elements (non-pipes are ignored)
        system_types: PipeSystemType names to include
        parameter_keys: Overrides for DEFAULT_PARAMETER_KEYS, typically
            BuiltInParameter values (RBS_DRAIN_FIXTURE_UNITS_PARAM,
            RBS_PIPE_SLOPE_PARAM)

    Returns:
        Tuple of (segments, element lookup by segment id)

    Example:
        >>> segments, elements = select_sanitary_segments(selected_pipes)
        >>> for seg in segments:
        ...     print(f"{seg.id}: {seg.load_units} DFU")
    """
    keys = dict(DEFAULT_PARAMETER_KEYS)
    if parameter_keys:
        keys.update(parameter_keys)

    segments: List[Segment] = []
    lookup: Dict[SegmentId, Any] = {}

    for element in elements or []:
        try:
            segment = _extract_segment(element, system_types, keys)
        except Exception as e:
            # Log warning but continue processing other elements
            logger.warning(f"Failed to extract segment from element {get_element_id(element)}: {e}")
            continue

        if segment is None:
            continue
        segments.append(segment)
        lookup[segment.id] = element

    logger.info(f"Selected {len(segments)} sanitary segments")
    return segments, lookup


def _extract_segment(
    element: Any,
    system_types: Sequence[str],
    keys: Dict[str, Any],
) -> Optional[Segment]:
    """Convert one element, or return None if it is not a selected pipe."""
    element_id = get_element_id(element)

    system_type = get_pipe_system_type(element)
    if system_type is None:
        logger.debug(f"Element {element_id} is not a pipe")
        return None
    if system_types and system_type not in system_types:
        logger.debug(f"Element {element_id} system type {system_type} not selected")
        return None

    endpoints = get_pipe_endpoints(element)
    if endpoints is None:
        logger.debug(f"Element {element_id} has no LocationCurve")
        return None

    load_units = _read_double(element, keys["load_units"])
    if load_units is None or load_units < 0:
        load_units = 0.0

    return Segment(
        id=element_id,
        endpoint_a=endpoints[0],
        endpoint_b=endpoints[1],
        load_units=load_units,
        slope=_read_double(element, keys["slope"]),
        diameter=_read_double(element, keys["diameter"]),
        neighbor_ids=get_connected_pipe_ids(element),
        neighbor_endpoints=get_connected_pipe_endpoints(element),
        system_type=system_type,
    )


def get_pipe_system_type(element: Any) -> Optional[str]:
    """
    Get the piping system type name of a pipe.

    Revit enums are compared as strings for cross-assembly compatibility,
    e.g. "PipeSystemType.Sanitary" -> "Sanitary".
    """
    system_type = getattr(element, 'PipeSystemType', None)
    if system_type is None:
        return None
    return str(system_type).split(".")[-1]


def get_pipe_endpoints(element: Any) -> Optional[Tuple[Point3D, Point3D]]:
    """Endpoints of a pipe's LocationCurve, or None."""
    location = getattr(element, 'Location', None)
    curve = getattr(location, 'Curve', None) if location is not None else None
    if curve is None:
        return None
    return _to_point(curve.GetEndPoint(0)), _to_point(curve.GetEndPoint(1))


def get_connected_pipes(element: Any) -> List[Any]:
    """
    Pipes connected to this element through its connectors.

    Walks ConnectorManager.Connectors and each connector's AllRefs, keeping
    owners that are pipes other than the element itself.
    """
    element_id = get_element_id(element)
    conn_manager = getattr(element, 'ConnectorManager', None)
    if conn_manager is None:
        return []
    connectors = getattr(conn_manager, 'Connectors', None)
    if connectors is None:
        return []

    owners: List[Any] = []
    seen = set()
    for conn in connectors:
        for ref in getattr(conn, 'AllRefs', None) or []:
            owner = getattr(ref, 'Owner', None)
            if owner is None or getattr(owner, 'PipeSystemType', None) is None:
                continue
            owner_id = get_element_id(owner)
            if owner_id == element_id or owner_id in seen:
                continue
            seen.add(owner_id)
            owners.append(owner)
    return owners


def get_connected_pipe_ids(element: Any) -> List[SegmentId]:
    """Ids of pipes connected to this element."""
    return [get_element_id(owner) for owner in get_connected_pipes(element)]


def get_connected_pipe_endpoints(element: Any) -> List[Tuple[Point3D, Point3D]]:
    """Endpoint pairs of pipes connected to this element."""
    pairs = []
    for owner in get_connected_pipes(element):
        endpoints = get_pipe_endpoints(owner)
        if endpoints is not None:
            pairs.append(endpoints)
    return pairs


def get_element_id(element: Any) -> int:
    """
    Get integer ID from Revit element.

    Args:
        element: Revit element (Pipe, FamilyInstance, etc.)

    Returns:
        Integer element ID, 0 if unavailable
    """
    element_id = getattr(element, 'Id', None)
    if element_id is not None:
        int_value = getattr(element_id, 'IntegerValue', None)
        if int_value is not None:
            return int(int_value)
    return 0


def _read_double(element: Any, key: Any) -> Optional[float]:
    param = get_element_parameter(element, key)
    if param is None:
        return None
    has_value = getattr(param, 'HasValue', True)
    if not has_value:
        return None
    return float(param.AsDouble())


def _to_point(xyz: Any) -> Point3D:
    return (
        float(getattr(xyz, 'X', 0)),
        float(getattr(xyz, 'Y', 0)),
        float(getattr(xyz, 'Z', 0)),
    )
