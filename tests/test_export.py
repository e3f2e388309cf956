"""
Tests for graph export and plotting of segments.
"""

import matplotlib

matplotlib.use("Agg")

import networkx as nx
import numpy as np
import pytest

from skelseg import Segment, SegmentClass, Synapse, segments_to_networkx, to_networkx
from skelseg import visualize_3d


@pytest.fixture
def segment():
    seg = Segment(
        [(0, 0, 0, 1.0), (0, 0, 5, 0.8), (0, 3, 9, 0.5)],
        segment_class=SegmentClass.DENDRITE,
    )
    seg.attach_pre_synapse(0, Synapse(id=1))
    seg.attach_post_synapse(2, Synapse(id=2))
    return seg


def test_to_networkx_builds_path(segment):
    G = to_networkx(segment)
    assert G.number_of_nodes() == 3
    assert G.number_of_edges() == 2
    assert nx.is_connected(G)
    np.testing.assert_allclose(G.nodes[1]["center"], [0, 0, 5])
    assert G.nodes[1]["radius"] == pytest.approx(0.8)
    assert G.nodes[0]["pre_synapse"] == Synapse(id=1)
    assert G.nodes[0]["post_synapse"] is None
    assert G.nodes[2]["kind"] == "dendrite"


def test_segments_to_networkx_keeps_segments_apart(segment):
    G = segments_to_networkx([segment, Segment([(9, 9, 9, 1), (9, 9, 10, 1)])])
    assert G.number_of_nodes() == 5
    assert nx.number_connected_components(G) == 2
    assert G.nodes[3]["segment_id"] == 1


def test_visualize_plotly(segment):
    pytest.importorskip("plotly")
    fig = visualize_3d(segment, backend="plotly")
    assert fig is not None
    # chain line plus one trace per synapse kind
    assert len(fig.data) == 3


def test_visualize_matplotlib(segment):
    import matplotlib.pyplot as plt

    fig = visualize_3d(segment, backend="matplotlib")
    assert fig is not None
    plt.close(fig)


def test_visualize_unknown_backend(segment):
    with pytest.raises(ValueError):
        visualize_3d(segment, backend="vtk")
