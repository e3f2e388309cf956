"""
skelseg: segments of reconstructed neuron skeletons

A Python package for the unbranched pieces of a traced neuron skeleton: node
chains with radii, their shape features (path length, frustum surface area and
volume, tortuosity, spine radius ratio), attached pre- and postsynaptic
contacts, axon/dendrite classification and structural edits (split, merge,
node removal, deduplication, translation).
"""

__version__ = "0.1.0"

from .bounding_box import BoundingBox
from .classify import adjust_class, classify
from .config import DEFAULT_OPTIONS, SegmentOptions
from .editing import merge, remove_node, remove_nodes, split, translate
from .exceptions import PreconditionViolation, SkelsegError
from .graph import segments_to_networkx, to_networkx
from .nodes import Node
from .segment import Segment, SegmentClass, SegmentFeatures
from .synapses import AttachOutcome, Synapse, SynapseSlotMap
from .visualization import visualize_3d

__all__ = [
    # Segment model
    "Node",
    "Segment",
    "SegmentClass",
    "SegmentFeatures",
    # Synapse attachment
    "Synapse",
    "SynapseSlotMap",
    "AttachOutcome",
    # Classification
    "classify",
    "adjust_class",
    # Edits returning new segments
    "translate",
    "remove_node",
    "remove_nodes",
    "split",
    "merge",
    # Geometry helpers
    "BoundingBox",
    # Export and plotting
    "to_networkx",
    "segments_to_networkx",
    "visualize_3d",
    # Configuration and errors
    "SegmentOptions",
    "DEFAULT_OPTIONS",
    "SkelsegError",
    "PreconditionViolation",
]
