"""
Axis-aligned bounding boxes around node chains.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .exceptions import PreconditionViolation
from .nodes import chain_to_array, point_to_xyz


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned box spanned by `start` (minimum corner) and `stop` (maximum
    corner). Node radii are not included in the extent.
    """

    start: np.ndarray
    stop: np.ndarray

    @staticmethod
    def from_nodes(chain) -> "BoundingBox":
        arr = chain_to_array(chain)
        if arr.shape[0] == 0:
            raise PreconditionViolation("Cannot bound an empty node chain")
        xyz = arr[:, :3]
        return BoundingBox(xyz.min(axis=0), xyz.max(axis=0))

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            np.minimum(self.start, other.start), np.maximum(self.stop, other.stop)
        )

    def size(self) -> np.ndarray:
        return self.stop - self.start

    def center(self) -> np.ndarray:
        return (self.start + self.stop) * 0.5

    def contains(self, point: Sequence[float]) -> bool:
        p = point_to_xyz(point)
        return bool(np.all(p >= self.start) and np.all(p <= self.stop))

    def distance_from(self, point: Sequence[float]) -> float:
        """Distance from `point` to the closest point of the box (0 inside)."""
        p = point_to_xyz(point)
        gap = np.maximum(np.maximum(self.start - p, p - self.stop), 0.0)
        return float(np.linalg.norm(gap))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return bool(
            np.array_equal(self.start, other.start)
            and np.array_equal(self.stop, other.stop)
        )

    def __hash__(self) -> int:
        return hash((tuple(self.start.tolist()), tuple(self.stop.tolist())))
