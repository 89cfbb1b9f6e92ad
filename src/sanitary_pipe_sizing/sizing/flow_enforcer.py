# File: src/sanitary_pipe_sizing/sizing/flow_enforcer.py
"""
No-reduction-in-flow-direction rule (IPC §710.1.8).

The running maximum diameter is an explicit immutable accumulator threaded
through the ordered segment sequence.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class FlowState:
    """
    Accumulator carried between segments of one sizing pass.

    Attributes:
        max_upstream_diameter: Largest final diameter seen so far
    """
    max_upstream_diameter: float = 0.0


def enforce_no_reduction(state: FlowState, own_diameter: float) -> Tuple[float, FlowState]:
    """
    Apply the non-reduction rule to one segment.

    Args:
        state: Accumulator from the previous segment
        own_diameter: Diameter the segment would need on its own

    Returns:
        Tuple of (final diameter, accumulator for the next segment)
    """
    final_diameter = max(own_diameter, state.max_upstream_diameter)
    next_state = FlowState(
        max_upstream_diameter=max(state.max_upstream_diameter, final_diameter)
    )
    return final_diameter, next_state


def enforce_sequence(
    own_diameters: Iterable[float],
    initial: FlowState = FlowState(),
) -> Tuple[List[float], FlowState]:
    """Fold ``enforce_no_reduction`` over diameters already in flow order."""
    finals = []
    state = initial
    for own in own_diameters:
        final, state = enforce_no_reduction(state, own)
        finals.append(final)
    return finals, state
