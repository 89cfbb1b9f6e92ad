# File: src/sanitary_pipe_sizing/core/network.py
"""
Connectivity graph over a set of drainage segments.

Segments are graph nodes keyed by id. Edges come from explicit host
connectivity (``Segment.neighbor_ids``, in either direction) and, between
segments that carry no explicit ids, from endpoints that coincide within a
tolerance. For orientation, endpoint pairs captured from the host connectors
(``Segment.neighbor_endpoints``) are used directly when present.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Tuple

import networkx as nx

from .segment import Point3D, Segment, SegmentId

logger = logging.getLogger(__name__)

# Distance below which two endpoints are considered connected (length units)
DEFAULT_CONNECTION_TOLERANCE = 0.01


def _distance(p1: Point3D, p2: Point3D) -> float:
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    dz = p1[2] - p2[2]
    return math.sqrt(dx * dx + dy * dy + dz * dz)


class SegmentNetwork:
    """
    Undirected segment connectivity graph with neighbor queries.

    Attributes:
        segments: Segments keyed by id, in input order
        tolerance: Endpoint matching tolerance for implicit connectivity
        graph: NetworkX graph with one node per segment id
    """

    def __init__(
        self,
        segments: Iterable[Segment],
        tolerance: float = DEFAULT_CONNECTION_TOLERANCE,
    ):
        self.tolerance = tolerance
        self.segments: Dict[SegmentId, Segment] = {}
        for segment in segments:
            if segment.id in self.segments:
                logger.warning(f"Duplicate segment id {segment.id}, keeping the first")
                continue
            self.segments[segment.id] = segment

        self.graph = self._build_graph()

    def __len__(self) -> int:
        return len(self.segments)

    def __contains__(self, segment_id: SegmentId) -> bool:
        return segment_id in self.segments

    def _build_graph(self) -> nx.Graph:
        graph = nx.Graph()
        for segment_id, segment in self.segments.items():
            graph.add_node(segment_id, segment=segment)

        # Explicit host connectivity
        for segment in self.segments.values():
            for neighbor_id in segment.neighbor_ids:
                if neighbor_id == segment.id:
                    continue
                if neighbor_id not in self.segments:
                    logger.debug(
                        f"Segment {segment.id}: neighbor {neighbor_id} not in sizing set"
                    )
                    continue
                graph.add_edge(segment.id, neighbor_id, source="host")

        # Coincident endpoints, only between segments without host connectivity
        implicit = [s for s in self.segments.values() if not s.neighbor_ids]
        for i, first in enumerate(implicit):
            for second in implicit[i + 1:]:
                if self._shares_endpoint(first, second):
                    graph.add_edge(first.id, second.id, source="geometry")

        logger.debug(
            f"Segment network: {graph.number_of_nodes()} segments, "
            f"{graph.number_of_edges()} connections"
        )
        return graph

    def neighbors_of(self, segment: Segment) -> List[Segment]:
        """
        Get the segments connected to either endpoint of ``segment``.

        Args:
            segment: Segment to look up

        Returns:
            Connected segments, never including ``segment`` itself
        """
        if segment.id not in self.graph:
            return []
        return [
            self.segments[neighbor_id]
            for neighbor_id in self.graph.neighbors(segment.id)
            if neighbor_id != segment.id
        ]

    def neighbor_endpoints(self, segment: Segment) -> List[Tuple[Point3D, Point3D]]:
        """
        Endpoint pairs of every neighbor of ``segment``.

        Host-captured ``Segment.neighbor_endpoints`` take precedence, since
        they also cover connected pipes outside the sizing set.
        """
        if segment.neighbor_endpoints:
            return list(segment.neighbor_endpoints)
        return [neighbor.endpoints for neighbor in self.neighbors_of(segment)]

    def connected_groups(self) -> List[List[SegmentId]]:
        """Segment ids grouped by connected drainage network."""
        return [sorted(group, key=str) for group in nx.connected_components(self.graph)]

    def _shares_endpoint(self, first: Segment, second: Segment) -> bool:
        for p1 in first.endpoints:
            for p2 in second.endpoints:
                if _distance(p1, p2) <= self.tolerance:
                    return True
        return False
