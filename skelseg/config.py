"""
Tunable parameters shared by segment operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class SegmentOptions:
    # Segments without synapses longer than this (path length units) are axons
    axon_path_length: float = 5000.0
    # Synapse density is reported as count per `density_scale` path length units
    density_scale: float = 1000.0
    # Colliding attachments are moved at most this many nodes away
    attach_probe_radius: int = 3


DEFAULT_OPTIONS = SegmentOptions()


def resolve_options(options: Optional[SegmentOptions]) -> SegmentOptions:
    return DEFAULT_OPTIONS if options is None else options
