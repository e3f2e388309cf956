"""
3D plots of segments with their synapse sites.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .nodes import chain_to_array
from .segment import Segment

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _synapse_points(segment: Segment, which: str) -> np.ndarray:
    slot_map = segment.pre_synapses if which == "pre" else segment.post_synapses
    arr = chain_to_array(segment.nodes)
    idx = slot_map.indices()
    return arr[idx, :3] if idx else np.zeros((0, 3), dtype=float)


def visualize_3d(
    segment: Segment,
    title: Optional[str] = None,
    color: str = "crimson",
    *,
    backend: str = "auto",
    pre_color: str = "royalblue",
    post_color: str = "darkorange",
    show_axes: bool = True,
    width: int = 800,
    height: int = 600,
    line_width: float = 3.0,
    marker_size: float = 5.0,
) -> Optional[object]:
    """Plot the segment polyline with markers on presynapse and postsynapse nodes.

    Args:
        segment: Segment to draw.
        title: Figure title (default: `Segment.describe`).
        color: Line color for the node chain.
        backend: 'plotly', 'matplotlib', or 'auto'
        pre_color: Marker color for presynapse nodes.
        post_color: Marker color for postsynapse nodes.
        show_axes: Whether to display axes
        width: Figure width (pixels for plotly)
        height: Figure height (pixels for plotly)
        line_width: Line width for the chain
        marker_size: Synapse marker size

    Returns:
        Backend-specific figure object or None if the backend failed.
    """
    if title is None:
        title = segment.describe()
    P = chain_to_array(segment.nodes)[:, :3]
    pre = _synapse_points(segment, "pre")
    post = _synapse_points(segment, "post")

    if backend == "auto":
        try:
            import plotly.graph_objects as go  # noqa: F401

            backend = "plotly"
        except ImportError:
            backend = "matplotlib"

    if backend == "plotly":
        try:
            import plotly.graph_objects as go

            fig = go.Figure()
            if P.shape[0] > 0:
                fig.add_trace(
                    go.Scatter3d(
                        x=P[:, 0],
                        y=P[:, 1],
                        z=P[:, 2],
                        mode="lines",
                        line=dict(color=color, width=float(line_width)),
                        name="nodes",
                    )
                )
            for pts, c, name in ((pre, pre_color, "pre"), (post, post_color, "post")):
                if pts.shape[0] == 0:
                    continue
                fig.add_trace(
                    go.Scatter3d(
                        x=pts[:, 0],
                        y=pts[:, 1],
                        z=pts[:, 2],
                        mode="markers",
                        marker=dict(color=c, size=float(marker_size)),
                        name=name,
                    )
                )
            fig.update_layout(
                title=title,
                autosize=False,
                width=int(width),
                height=int(height),
                scene=dict(
                    aspectmode="data",
                    xaxis=dict(visible=show_axes),
                    yaxis=dict(visible=show_axes),
                    zaxis=dict(visible=show_axes),
                ),
            )
            return fig
        except Exception as e:
            logger.warning("Plotly visualization failed: %s", e)
            return None

    if backend == "matplotlib":
        try:
            import matplotlib.pyplot as plt

            fig = plt.figure(figsize=(max(4, width / 100), max(3, height / 100)))
            ax = fig.add_subplot(111, projection="3d")
            if P.shape[0] > 0:
                ax.plot(P[:, 0], P[:, 1], P[:, 2], color=color, linewidth=float(line_width))
            for pts, c in ((pre, pre_color), (post, post_color)):
                if pts.shape[0] > 0:
                    ax.scatter(pts[:, 0], pts[:, 1], pts[:, 2], color=c, s=marker_size**2)
            ax.set_xlabel("X")
            ax.set_ylabel("Y")
            ax.set_zlabel("Z")
            ax.set_title(title)
            if not show_axes:
                ax.set_axis_off()
            fig.tight_layout()
            return fig
        except Exception as e:
            logger.warning("Matplotlib visualization failed: %s", e)
            return None

    raise ValueError(f"Unknown backend: {backend}")
