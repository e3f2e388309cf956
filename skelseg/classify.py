"""
Heuristic axon/dendrite classification of segments.

The decision uses synapse counts and, for segments without synapses, path
length:

1. more presynapses than postsynapses      -> axon
2. more postsynapses than presynapses      -> dendrite
3. no synapses and path length > threshold -> axon (long orphan segment)
4. otherwise                               -> dendrite

Only undefined segments are classified. Soma is never derived here.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import SegmentOptions, resolve_options
from .segment import Segment, SegmentClass

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def classify(segment: Segment, options: Optional[SegmentOptions] = None) -> SegmentClass:
    """Return the class the heuristic assigns to `segment` without changing it."""
    opts = resolve_options(options)
    n_pre = segment.num_pre_synapses()
    n_post = segment.num_post_synapses()
    if n_pre > n_post:
        # mostly output sites. Note that this fails at the axon hillock,
        # where postsynapses are common.
        return SegmentClass.AXON
    if n_pre < n_post:
        return SegmentClass.DENDRITE
    if n_post == 0 and segment.path_length() > opts.axon_path_length:
        return SegmentClass.AXON
    return SegmentClass.DENDRITE


def adjust_class(
    segment: Segment, options: Optional[SegmentOptions] = None
) -> SegmentClass:
    """
    Classify `segment` in place if its class is undefined.

    Returns:
        The segment's class after the call.
    """
    if segment.segment_class == SegmentClass.UNDEFINED:
        segment.segment_class = classify(segment, options)
        logger.debug("Classified %r", segment)
    return segment.segment_class
