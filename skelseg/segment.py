"""
Skeleton segments.

A `Segment` is a contiguous, unbranched piece of a reconstructed neuron
skeleton: a node chain of ``(x, y, z, r)`` samples, a morphological class and
two sparse synapse maps (presynaptic and postsynaptic contacts) whose domain is
always the node chain.

Operations come in two kinds:
- In-place mutators on the segment itself: `attach_pre_synapse`,
  `attach_post_synapse`, `adjust_class` and `remove_redundant_nodes`.
- Value-returning edits in `skelseg.editing` (`translate`, `remove_nodes`,
  `split`, `merge`), which leave their inputs untouched.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from . import geometry
from .bounding_box import BoundingBox
from .config import SegmentOptions, resolve_options
from .exceptions import PreconditionViolation
from .nodes import Node, as_node_list
from .synapses import AttachOutcome, Synapse, SynapseSlotMap

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class SegmentClass(enum.IntEnum):
    """Morphological class, using the SWC structure type codes."""

    UNDEFINED = 0
    SOMA = 1
    AXON = 2
    DENDRITE = 3


@dataclass(frozen=True)
class SegmentFeatures:
    """Shape and connectivity features of one segment."""

    path_length: float
    surface_area: float
    volume: float
    mean_radius: float
    std_radius: float
    num_pre_synapses: int
    num_post_synapses: int
    tortuosity: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def as_array(self) -> np.ndarray:
        return np.array(list(asdict(self).values()), dtype=float)


class Segment:
    """
    An unbranched piece of neuron skeleton with attached synapses.

    Attributes:
        segment_class: Morphological class. Axon and dendrite are derived by
            `adjust_class`; soma is only ever assigned directly.
        pre_synapses: Presynaptic contacts by node index.
        post_synapses: Postsynaptic contacts by node index.
    """

    def __init__(
        self,
        nodes: Optional[Sequence[Sequence[float]]] = None,
        segment_class: Union[SegmentClass, int] = SegmentClass.UNDEFINED,
        pre_synapses: Optional[SynapseSlotMap] = None,
        post_synapses: Optional[SynapseSlotMap] = None,
    ):
        self._nodes: List[Node] = as_node_list(nodes) if nodes is not None else []
        n = len(self._nodes)
        if pre_synapses is None:
            pre_synapses = SynapseSlotMap(n, label="presynapse")
        if post_synapses is None:
            post_synapses = SynapseSlotMap(n, label="postsynapse")
        for name, slot_map in (("pre", pre_synapses), ("post", post_synapses)):
            if slot_map.size != n:
                raise PreconditionViolation(
                    f"{name}-synapse map covers {slot_map.size} nodes, "
                    f"but the segment has {n}"
                )
        self.segment_class = SegmentClass(segment_class)
        self.pre_synapses = pre_synapses
        self.post_synapses = post_synapses

    # ------------------------------------------------------------------
    # Node access
    # ------------------------------------------------------------------
    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return list(self._nodes[index])
        return self._nodes[index]

    def is_empty(self) -> bool:
        return not self._nodes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return (
            self._nodes == other._nodes
            and self.segment_class == other.segment_class
            and self.pre_synapses == other.pre_synapses
            and self.post_synapses == other.post_synapses
        )

    __hash__ = None  # mutable

    def copy(self) -> "Segment":
        return Segment(
            self._nodes,
            self.segment_class,
            self.pre_synapses.copy(),
            self.post_synapses.copy(),
        )

    def describe(self) -> str:
        """One-line summary of class, size and synapse counts."""
        return (
            f"{self.segment_class.name.lower()} segment with {len(self)} nodes, "
            f"{self.num_pre_synapses()} presynapses, "
            f"{self.num_post_synapses()} postsynapses"
        )

    def __repr__(self) -> str:
        return (
            f"Segment(n_nodes={len(self)}, class={self.segment_class.name}, "
            f"pre={self.num_pre_synapses()}, post={self.num_post_synapses()})"
        )

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def path_length(self, up_to: Optional[int] = None) -> float:
        return geometry.path_length(self._nodes, up_to)

    def radius_list(self) -> np.ndarray:
        return geometry.radius_list(self._nodes)

    def surface_area(self) -> float:
        return geometry.surface_area(self._nodes)

    def volume(self) -> float:
        return geometry.volume(self._nodes)

    def tortuosity(self) -> float:
        return geometry.tortuosity(self._nodes)

    def tail_head_radius_ratio(self) -> float:
        return geometry.tail_head_radius_ratio(self._nodes)

    def center(self, index_range=None) -> Node:
        return geometry.center(self._nodes, index_range)

    def distance_from(self, point: Sequence[float]) -> Tuple[float, int]:
        """``(distance, index)`` of the node nearest to `point`."""
        return geometry.nearest_point(self._nodes, point)

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_nodes(self._nodes)

    def bounding_box_distance(self, point: Sequence[float]) -> float:
        return geometry.bounding_box_distance(self._nodes, point)

    def features(self) -> SegmentFeatures:
        radii = self.radius_list()
        return SegmentFeatures(
            path_length=self.path_length(),
            surface_area=self.surface_area(),
            volume=self.volume(),
            mean_radius=float(np.mean(radii)) if radii.size else float("nan"),
            # sample standard deviation; undefined for a single node
            std_radius=float(np.std(radii, ddof=1)) if radii.size > 1 else float("nan"),
            num_pre_synapses=self.num_pre_synapses(),
            num_post_synapses=self.num_post_synapses(),
            tortuosity=self.tortuosity(),
        )

    # ------------------------------------------------------------------
    # Synapses
    # ------------------------------------------------------------------
    def get_pre_synapse(self, index: int) -> Optional[Synapse]:
        return self.pre_synapses[index]

    def get_post_synapse(self, index: int) -> Optional[Synapse]:
        return self.post_synapses[index]

    def num_pre_synapses(self) -> int:
        return self.pre_synapses.count()

    def num_post_synapses(self) -> int:
        return self.post_synapses.count()

    def _density(self, count: int, options: Optional[SegmentOptions]) -> float:
        opts = resolve_options(options)
        # a zero path length yields inf or nan rather than raising
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(
                np.float64(count) / np.float64(self.path_length()) * opts.density_scale
            )

    def pre_synapse_density(self, options: Optional[SegmentOptions] = None) -> float:
        """Presynapses per `density_scale` units of path length."""
        return self._density(self.num_pre_synapses(), options)

    def post_synapse_density(self, options: Optional[SegmentOptions] = None) -> float:
        """Postsynapses per `density_scale` units of path length."""
        return self._density(self.num_post_synapses(), options)

    def attach_pre_synapse(
        self,
        index: int,
        synapse: Synapse,
        options: Optional[SegmentOptions] = None,
    ) -> AttachOutcome:
        opts = resolve_options(options)
        return self.pre_synapses.attach(
            index, synapse, probe_radius=opts.attach_probe_radius
        )

    def attach_post_synapse(
        self,
        index: int,
        synapse: Synapse,
        options: Optional[SegmentOptions] = None,
    ) -> AttachOutcome:
        opts = resolve_options(options)
        return self.post_synapses.attach(
            index, synapse, probe_radius=opts.attach_probe_radius
        )

    # ------------------------------------------------------------------
    # In-place edits
    # ------------------------------------------------------------------
    def adjust_class(self, options: Optional[SegmentOptions] = None) -> SegmentClass:
        from .classify import adjust_class  # local import to avoid circulars

        return adjust_class(self, options)

    def remove_redundant_nodes(self) -> int:
        """
        Collapse runs of identical consecutive nodes into their last node.

        Synapses on a collapsed node move to the node that is kept for its
        run. If that node already holds a different synapse, the moved one is
        dropped with a warning.

        Returns:
            Number of nodes removed.
        """
        n = len(self._nodes)
        if n < 2:
            return 0
        keep = [i for i in range(n - 1) if self._nodes[i] != self._nodes[i + 1]]
        keep.append(n - 1)
        if len(keep) == n:
            return 0

        # old index -> new index of the kept node ending its run
        new_index: List[int] = [0] * n
        pos = len(keep) - 1
        for i in range(n - 1, -1, -1):
            if pos > 0 and i <= keep[pos - 1]:
                pos -= 1
            new_index[i] = pos

        nodes = [self._nodes[i] for i in keep]
        remap = new_index.__getitem__

        def closest(i: int) -> int:
            # on a clash the synapse nearest the kept node wins
            return keep[new_index[i]] - i

        pre = self.pre_synapses.remapped(remap, len(nodes), priority=closest)
        post = self.post_synapses.remapped(remap, len(nodes), priority=closest)

        self._nodes = nodes
        self.pre_synapses = pre
        self.post_synapses = post
        removed = n - len(nodes)
        logger.debug("Removed %d redundant nodes from %r", removed, self)
        return removed
