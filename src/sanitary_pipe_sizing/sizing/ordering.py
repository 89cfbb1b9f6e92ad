# File: src/sanitary_pipe_sizing/sizing/ordering.py
"""
Upstream-to-downstream processing order.

Gravity drainage is assumed to descend monotonically along the flow path,
so a segment's highest endpoint elevation stands in for its hydraulic
position. No graph reachability is checked.
"""

from typing import Iterable, List, Tuple

from ..core.segment import Segment

ELEVATION_ORDER_ASSUMPTION = (
    "Upstream order is approximated by descending maximum endpoint elevation; "
    "networks are assumed to descend monotonically along the flow path."
)


def _sort_key(segment: Segment) -> Tuple[float, str]:
    # Ties fall back to the id so repeated passes visit segments identically
    return (-segment.elevation, str(segment.id))


def build_sizing_order(segments: Iterable[Segment]) -> List[Segment]:
    """
    Order segments highest elevation first.

    Args:
        segments: Unordered segment collection

    Returns:
        New list in processing order; empty input gives an empty list
    """
    return sorted(segments, key=_sort_key)
