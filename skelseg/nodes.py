"""
Node samples and node chains.

A node chain is an ordered sequence of `Node` samples ``(x, y, z, r)``: a 3D
position plus the local radius, both in microns. Order carries path semantics,
so chains are never sorted. Geometry code works on the ``(N, 4)`` float array
returned by `chain_to_array`.
"""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Sequence, Tuple

import numpy as np

from .exceptions import PreconditionViolation


class Node(NamedTuple):
    x: float
    y: float
    z: float
    r: float

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def offset(self, dx: float, dy: float, dz: float) -> "Node":
        return Node(self.x + dx, self.y + dy, self.z + dz, self.r)


def as_node(value: Sequence[float]) -> Node:
    """Coerce a 4-sequence into a `Node` of floats."""
    if isinstance(value, Node):
        return value
    if len(value) != 4:
        raise PreconditionViolation(
            f"A node needs 4 components (x, y, z, r), got {len(value)}"
        )
    x, y, z, r = (float(c) for c in value)
    return Node(x, y, z, r)


def as_node_list(values: Iterable[Sequence[float]]) -> List[Node]:
    return [as_node(v) for v in values]


def chain_to_array(chain: Sequence[Sequence[float]]) -> np.ndarray:
    """Return the chain as an ``(N, 4)`` float array (``(0, 4)`` when empty)."""
    chain = getattr(chain, "nodes", chain)
    if len(chain) == 0:
        return np.zeros((0, 4), dtype=float)
    arr = np.asarray(chain, dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 4:
        raise PreconditionViolation("A node chain must be an (N, 4) sequence")
    return arr


def point_to_xyz(point: Sequence[float]) -> np.ndarray:
    """Take the x, y, z of a 3- or 4-component point; a trailing radius is ignored."""
    p = np.asarray(point, dtype=float).reshape(-1)
    if p.shape[0] not in (3, 4):
        raise PreconditionViolation(
            f"A point needs 3 or 4 components, got {p.shape[0]}"
        )
    return p[:3]


def range_bounds(index_range, n: int) -> Tuple[int, int]:
    """
    Resolve a unit-step `range` or `slice` over a chain of length `n` to
    half-open ``(start, stop)`` bounds.

    Slices follow the usual Python clamping rules; ranges must lie inside
    ``[0, n]``.
    """
    if isinstance(index_range, slice):
        if index_range.step not in (None, 1):
            raise PreconditionViolation("Only unit-step slices are supported")
        start, stop, _ = index_range.indices(n)
        return start, max(start, stop)
    if isinstance(index_range, range):
        if index_range.step != 1:
            raise PreconditionViolation("Only unit-step ranges are supported")
        start, stop = index_range.start, max(index_range.start, index_range.stop)
        if start < 0 or stop > n:
            raise PreconditionViolation(
                f"Range {index_range} is outside a chain of {n} nodes"
            )
        return start, stop
    raise TypeError(f"Expected a range or slice, got {type(index_range).__name__}")
