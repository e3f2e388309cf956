"""
Sparse attachment of synapses to node indices.

A `SynapseSlotMap` associates at most one `Synapse` with each node index of a
chain of `size` nodes. Segments own two maps, one for presynaptic and one for
postsynaptic contacts. Synapses are owned elsewhere; the map only holds
references and compares them by equality.

Attachment never overwrites. When the requested slot is taken, the synapse is
placed in the nearest free slot, probing in this order and skipping indices
outside the chain:

    index-1, index+1, index-2, index+2, ..., index-k, index+k

with ``k = attach_probe_radius`` (3 by default). If nothing within the window
is free, the attachment is dropped.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from .exceptions import PreconditionViolation

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class Synapse:
    """A detected synaptic contact. Equal fields mean the same synapse."""

    id: int
    position: Optional[Tuple[float, float, float]] = None
    confidence: float = 1.0


class AttachOutcome(enum.Enum):
    ATTACHED = "attached"
    DUPLICATE = "duplicate"
    DROPPED = "dropped"


def probe_order(index: int, size: int, radius: int = 3) -> List[int]:
    """Candidate slots for an attachment at `index`, nearest first."""
    order = [index]
    for k in range(1, radius + 1):
        order.extend((index - k, index + k))
    return [i for i in order if 0 <= i < size]


class SynapseSlotMap:
    """
    Sparse map from node index (``0 <= index < size``) to a synapse.

    Attributes:
        size: Number of nodes in the owning chain (the map's domain).
        label: Name used in log messages, e.g. "presynapse".
    """

    def __init__(
        self,
        size: int,
        slots: Optional[Mapping[int, Synapse]] = None,
        *,
        label: str = "synapse",
    ):
        if size < 0:
            raise PreconditionViolation("Slot map size must be non-negative")
        self.size = int(size)
        self.label = label
        self._slots: Dict[int, Synapse] = {}
        if slots:
            for index, synapse in slots.items():
                self.place(index, synapse)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def _check_index(self, index: int) -> int:
        index = int(index)
        if not 0 <= index < self.size:
            raise PreconditionViolation(
                f"Node index {index} is outside a chain of {self.size} nodes"
            )
        return index

    def __getitem__(self, index: int) -> Optional[Synapse]:
        return self._slots.get(self._check_index(index))

    def __contains__(self, index: object) -> bool:
        return index in self._slots

    def __iter__(self) -> Iterator[Tuple[int, Synapse]]:
        return iter(self.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SynapseSlotMap):
            return NotImplemented
        return self.size == other.size and self._slots == other._slots

    def __repr__(self) -> str:
        return f"SynapseSlotMap(size={self.size}, slots={dict(self.items())!r})"

    def count(self) -> int:
        """Number of occupied slots."""
        return len(self._slots)

    def indices(self) -> List[int]:
        return sorted(self._slots)

    def items(self) -> List[Tuple[int, Synapse]]:
        return [(i, self._slots[i]) for i in sorted(self._slots)]

    def index_of(self, synapse: Synapse) -> Optional[int]:
        for index, existing in self.items():
            if existing == synapse:
                return index
        return None

    def copy(self) -> "SynapseSlotMap":
        new = SynapseSlotMap(self.size, label=self.label)
        new._slots = dict(self._slots)
        return new

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place(self, index: int, synapse: Synapse) -> None:
        """Store `synapse` at exactly `index`, replacing any previous entry."""
        self._slots[self._check_index(index)] = synapse

    def attach(
        self, index: int, synapse: Synapse, *, probe_radius: int = 3
    ) -> AttachOutcome:
        """
        Attach `synapse` at `index` or the nearest free slot within
        `probe_radius` nodes.

        Returns:
            ATTACHED when placed, DUPLICATE when `index` already holds an equal
            synapse (nothing changes), DROPPED when no probed slot is free.
        """
        index = self._check_index(index)
        existing = self._slots.get(index)
        if existing is not None and existing == synapse:
            logger.warning(
                "Same %s already attached at node %d, skipping", self.label, index
            )
            return AttachOutcome.DUPLICATE
        for candidate in probe_order(index, self.size, probe_radius):
            if candidate not in self._slots:
                self._slots[candidate] = synapse
                if candidate != index:
                    logger.debug(
                        "Node %d holds a %s, attached at node %d instead",
                        index,
                        self.label,
                        candidate,
                    )
                return AttachOutcome.ATTACHED
        logger.warning(
            "No free slot for %s within %d nodes of node %d, dropping it",
            self.label,
            probe_radius,
            index,
        )
        return AttachOutcome.DROPPED

    # ------------------------------------------------------------------
    # Reindexing (each returns a new map)
    # ------------------------------------------------------------------
    def remapped(
        self,
        new_index: Callable[[int], Optional[int]],
        size: int,
        *,
        priority: Optional[Callable[[int], float]] = None,
    ) -> "SynapseSlotMap":
        """
        Build a map of `size` slots, moving each entry at ``i`` to
        ``new_index(i)``; entries mapped to None are discarded.

        When several entries land on one slot, the one with the lowest
        ``priority(i)`` (default: the lowest old index) keeps it and the
        others are dropped with a warning.
        """
        if priority is None:
            priority = float
        moves = []
        for old, synapse in self.items():
            new = new_index(old)
            if new is not None:
                moves.append((priority(old), old, new, synapse))
        moves.sort(key=lambda m: (m[0], m[1]))

        result = SynapseSlotMap(size, label=self.label)
        for _, old, new, synapse in moves:
            current = result._slots.get(new)
            if current is None:
                result.place(new, synapse)
            elif current != synapse:
                logger.warning(
                    "Node %d already holds a %s, dropping the one from node %d",
                    new,
                    self.label,
                    old,
                )
        return result

    def without_range(self, start: int, stop: int) -> "SynapseSlotMap":
        """Entries after deleting nodes ``[start, stop)`` from the chain."""
        removed = stop - start

        def shift(i: int) -> Optional[int]:
            if i < start:
                return i
            if i >= stop:
                return i - removed
            return None

        return self.remapped(shift, self.size - removed)

    def sliced(self, start: int, stop: int) -> "SynapseSlotMap":
        """Entries for the sub-chain ``[start, stop)``, reindexed from 0."""
        return self.remapped(
            lambda i: i - start if start <= i < stop else None, stop - start
        )

    def shifted(self, offset: int, size: int) -> "SynapseSlotMap":
        """Entries moved by `offset` into a map of `size` slots."""
        return self.remapped(lambda i: i + offset, size)

    def union(self, other: "SynapseSlotMap") -> "SynapseSlotMap":
        """Combine two maps over the same domain; occupied slots must not clash."""
        if self.size != other.size:
            raise PreconditionViolation(
                f"Cannot combine slot maps of sizes {self.size} and {other.size}"
            )
        result = self.copy()
        for index, synapse in other.items():
            current = result._slots.get(index)
            if current is not None and current != synapse:
                raise PreconditionViolation(
                    f"Both maps hold a different {self.label} at node {index}"
                )
            result._slots[index] = synapse
        return result
