"""
Export segments as networkx graphs.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import networkx as nx
import numpy as np

from .segment import Segment

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def to_networkx(
    segment: Segment,
    *,
    graph: Optional[nx.Graph] = None,
    first_id: int = 0,
    segment_id: Optional[int] = None,
) -> nx.Graph:
    """
    Add the segment's nodes to a graph as a path.

    Graph node ids are ``first_id + index``. Node attributes: ``center``
    (x, y, z array), ``radius``, ``pre_synapse``/``post_synapse`` (None when
    unoccupied), ``kind`` (the segment class name) and ``segment_id``.

    Args:
        segment: Segment to export.
        graph: Existing graph to extend; a new one is created if None.
        first_id: Graph id of the segment's first node.
        segment_id: Optional label stored on nodes and edges.
    """
    G = nx.Graph() if graph is None else graph
    kind = segment.segment_class.name.lower()
    for index, node in enumerate(segment):
        G.add_node(
            first_id + index,
            center=np.array([node.x, node.y, node.z], dtype=float),
            radius=float(node.r),
            pre_synapse=segment.pre_synapses[index],
            post_synapse=segment.post_synapses[index],
            kind=kind,
            segment_id=segment_id,
        )
        if index > 0:
            G.add_edge(
                first_id + index - 1,
                first_id + index,
                kind="segment",
                segment_id=segment_id,
            )
    return G


def segments_to_networkx(segments: Iterable[Segment]) -> nx.Graph:
    """Export several segments into one graph, one connected path per segment."""
    G = nx.Graph()
    next_id = 0
    for segment_id, segment in enumerate(segments):
        to_networkx(segment, graph=G, first_id=next_id, segment_id=segment_id)
        next_id += len(segment)
    logger.debug(
        "Exported %d nodes, %d edges", G.number_of_nodes(), G.number_of_edges()
    )
    return G
