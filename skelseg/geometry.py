"""
Geometric measurements over node chains.

All functions are pure and take a node chain: any sequence of ``(x, y, z, r)``
samples (a list of `Node`, a `Segment`, or an ``(N, 4)`` array). Consecutive
nodes are treated as frusta (truncated cones) for surface area and volume:

    area   = pi * (r1 + r2) * sqrt(h^2 + (r1 - r2)^2)
    volume = pi * h * (r1^2 + r1*r2 + r2^2) / 3

where ``h`` is the Euclidean distance between the two node centers.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .bounding_box import BoundingBox
from .exceptions import PreconditionViolation
from .nodes import Node, chain_to_array, point_to_xyz, range_bounds

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def node_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two nodes using x, y, z only."""
    return float(np.linalg.norm(point_to_xyz(a[:3]) - point_to_xyz(b[:3])))


def _step_lengths(arr: np.ndarray) -> np.ndarray:
    if arr.shape[0] < 2:
        return np.zeros(0, dtype=float)
    return np.linalg.norm(np.diff(arr[:, :3], axis=0), axis=1)


def path_length(chain, up_to: Optional[int] = None) -> float:
    """
    Sum of distances between consecutive nodes.

    Args:
        chain: Node chain.
        up_to: Number of leading nodes to measure (default: the whole chain),
            so ``up_to=k`` measures from node 0 to node ``k - 1``.
    """
    arr = chain_to_array(chain)
    if up_to is not None:
        arr = arr[: max(int(up_to), 0)]
    return float(np.sum(_step_lengths(arr)))


def radius_list(chain) -> np.ndarray:
    return chain_to_array(chain)[:, 3].copy()


def surface_area(chain) -> float:
    """Lateral surface area of the frusta between consecutive nodes."""
    arr = chain_to_array(chain)
    if arr.shape[0] < 2:
        return 0.0
    h = _step_lengths(arr)
    r1 = arr[:-1, 3]
    r2 = arr[1:, 3]
    return float(np.sum(math.pi * (r1 + r2) * np.sqrt(h * h + (r1 - r2) ** 2)))


def volume(chain) -> float:
    """Volume of the frusta between consecutive nodes."""
    arr = chain_to_array(chain)
    if arr.shape[0] < 2:
        return 0.0
    h = _step_lengths(arr)
    r1 = arr[:-1, 3]
    r2 = arr[1:, 3]
    return float(np.sum(math.pi * h * (r1 * r1 + r1 * r2 + r2 * r2) / 3.0))


def tortuosity(chain) -> float:
    """
    Ratio of path length to the straight-line distance between the first and
    last node. A single node has tortuosity 1.0.

    Raises:
        PreconditionViolation: empty chain, identical end nodes, or zero
            distance between the end nodes.
    """
    arr = chain_to_array(chain)
    n = arr.shape[0]
    if n == 0:
        raise PreconditionViolation("Tortuosity of an empty chain is undefined")
    if n == 1:
        return 1.0
    if np.array_equal(arr[0], arr[-1]):
        raise PreconditionViolation(
            f"Chain starts and ends at the same node: {tuple(arr[0])}"
        )
    euclidean = float(np.linalg.norm(arr[-1, :3] - arr[0, :3]))
    if euclidean == 0.0:
        raise PreconditionViolation(
            "End nodes of the chain share a position; tortuosity is undefined"
        )
    return path_length(arr) / euclidean


def tail_head_radius_ratio(chain) -> float:
    """
    Maximum tail radius over mean head radius.

    The chain is halved at ``ceil(N / 2)``; the middle node belongs to both
    halves. Spines are thin at the head and thick at the tail, so this ratio is
    high for spine-like segments whose head points at the parent dendrite.
    """
    radii = radius_list(chain)
    n = radii.shape[0]
    if n == 0:
        raise PreconditionViolation("Radius ratio of an empty chain is undefined")
    mid = math.ceil(n / 2)
    head = radii[:mid]
    tail = radii[mid - 1 :]
    return float(np.max(tail) / np.mean(head))


def center(chain, index_range=None) -> Node:
    """Componentwise mean of x, y, z and r over `index_range` (default: all)."""
    arr = chain_to_array(chain)
    if index_range is not None:
        start, stop = range_bounds(index_range, arr.shape[0])
        arr = arr[start:stop]
    if arr.shape[0] == 0:
        raise PreconditionViolation("Center of an empty node range is undefined")
    return Node(*(float(v) for v in arr.mean(axis=0)))


def nearest_point(chain, point: Sequence[float]) -> Tuple[float, int]:
    """
    Find the node closest to `point` by 3D distance.

    Args:
        chain: Node chain.
        point: 3 or 4 components; a trailing radius is ignored.

    Returns:
        ``(distance, index)`` of the closest node. Ties resolve to the lowest
        index.
    """
    arr = chain_to_array(chain)
    if arr.shape[0] == 0:
        raise PreconditionViolation("Cannot find the nearest node of an empty chain")
    p = point_to_xyz(point)
    d = np.linalg.norm(arr[:, :3] - p, axis=1)
    idx = int(np.argmin(d))
    return float(d[idx]), idx


def bounding_box_distance(chain, point: Sequence[float]) -> float:
    """Distance from `point` to the axis-aligned box around the chain."""
    return BoundingBox.from_nodes(chain).distance_from(point)
