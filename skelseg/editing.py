"""
Structural edits that return new segments.

None of these functions modify their inputs. Synapse maps follow the nodes
they are attached to:

- `translate` keeps every attachment at its index.
- `remove_nodes` shifts attachments after the removed range down by its
  length and discards attachments inside it.
- `split` partitions attachments between the two halves.
- `merge` shifts the second segment's attachments past the first one's nodes.
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

from .exceptions import PreconditionViolation
from .nodes import range_bounds
from .segment import Segment

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def translate(segment: Segment, offset: Iterable[float]) -> Segment:
    """Shift every node by ``(dx, dy, dz)``; radii, class and synapses are kept."""
    offset = [float(c) for c in offset]
    if len(offset) != 3:
        raise PreconditionViolation(
            f"Offset needs 3 components (dx, dy, dz), got {len(offset)}"
        )
    dx, dy, dz = offset
    return Segment(
        [node.offset(dx, dy, dz) for node in segment],
        segment.segment_class,
        segment.pre_synapses.copy(),
        segment.post_synapses.copy(),
    )


def remove_nodes(segment: Segment, index_range) -> Segment:
    """
    Delete the nodes in `index_range` (a unit-step range or slice).

    Attachments before the range keep their index, attachments after it move
    down by the number of removed nodes, and attachments inside it are lost.
    Removing every node yields an empty, undefined segment.
    """
    start, stop = range_bounds(index_range, len(segment))
    removed = stop - start
    if removed == len(segment):
        return Segment()

    nodes = segment[:start] + segment[stop:]
    pre = segment.pre_synapses.without_range(start, stop)
    post = segment.post_synapses.without_range(start, stop)
    lost = (
        segment.num_pre_synapses()
        + segment.num_post_synapses()
        - pre.count()
        - post.count()
    )
    if lost:
        logger.info(
            "Removing nodes [%d, %d) discarded %d synapse attachments",
            start,
            stop,
            lost,
        )
    return Segment(nodes, segment.segment_class, pre, post)


def remove_node(segment: Segment, index: int) -> Segment:
    """Delete the single node at `index`."""
    return remove_nodes(segment, range(index, index + 1))


def split(segment: Segment, index: int) -> Tuple[Segment, Segment]:
    """
    Split a segment in two; the node at `index` starts the second half.

    Splitting at index 0 keeps the first node as the first half so that both
    halves are non-empty. A single-node segment splits into two copies of its
    node, with its synapses going to the first copy.

    Raises:
        PreconditionViolation: `index` is outside ``[0, len(segment))``.
    """
    n = len(segment)
    if not 0 <= index < n:
        raise PreconditionViolation(
            f"Split index {index} is outside a segment of {n} nodes"
        )

    if n == 1:
        bounds1, bounds2 = (0, 1), (0, 1)
    elif index == 0:
        bounds1, bounds2 = (0, 1), (1, n)
    else:
        bounds1, bounds2 = (0, index), (index, n)
    if bounds1[1] <= bounds1[0] or bounds2[1] <= bounds2[0]:
        raise PreconditionViolation(f"Splitting at {index} leaves an empty half")

    halves = []
    for start, stop in (bounds1, bounds2):
        halves.append(
            Segment(
                segment[start:stop],
                segment.segment_class,
                segment.pre_synapses.sliced(start, stop),
                segment.post_synapses.sliced(start, stop),
            )
        )
    first, second = halves

    if n == 1:
        # both halves hold the same node; keep the synapses on one copy only
        second = Segment(second.nodes, second.segment_class)
    return first, second


def merge(first: Segment, second: Segment) -> Segment:
    """
    Concatenate two segments, `first` then `second`.

    The longer segment's class wins; on a tie `first`'s class is kept.
    """
    n1, n2 = len(first), len(second)
    total = n1 + n2
    segment_class = first.segment_class if n1 >= n2 else second.segment_class
    pre = first.pre_synapses.shifted(0, total).union(
        second.pre_synapses.shifted(n1, total)
    )
    post = first.post_synapses.shifted(0, total).union(
        second.post_synapses.shifted(n1, total)
    )
    return Segment(list(first) + list(second), segment_class, pre, post)
