"""Utilities for visualizing clustering results."""

# Standard Library Imports
from typing import Optional, Sequence, Tuple

# Third Party Imports
import matplotlib.pyplot as plt
import seaborn as sns

# Internal Imports
from delivery_kmeans.core.models.spatial import Group, Point
from delivery_kmeans.utils.logging import get_logger

# Initialize logger
logger = get_logger(__name__)


def plot_groups(
    groups: Sequence[Group],
    points: Optional[Sequence[Point]] = None,
    title: Optional[str] = None,
    output_path: Optional[str] = None,
    fig_size: Tuple[int, int] = (8, 8),
) -> plt.Figure:
    """Scatter plot of group members coloured by group, with centroids.

    Args:
        groups: Groups to plot
        points: Points not assigned to any group, drawn in grey (optional)
        title: Plot title (optional)
        output_path: Path to save the figure (optional)
        fig_size: Figure size (width, height) in inches

    Returns:
        plt.Figure: The created figure
    """
    fig, ax = plt.subplots(figsize=fig_size)
    palette = sns.color_palette("husl", max(len(groups), 1))

    if points:
        unassigned = [
            point for point in points if not any(g.contains(point) for g in groups)
        ]
        if unassigned:
            ax.scatter(
                [p.lng for p in unassigned],
                [p.lat for p in unassigned],
                c="lightgrey",
                s=20,
                label="Unassigned",
            )

    for index, group in enumerate(groups):
        color = palette[index]
        ax.scatter(
            [p.lng for p in group.points],
            [p.lat for p in group.points],
            color=color,
            s=20,
            label=f"Group {index + 1} ({len(group)})",
        )
        ax.scatter(
            [group.lng],
            [group.lat],
            color=color,
            marker="X",
            s=150,
            edgecolors="black",
        )

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(title or "K-means groups")
    if groups:
        ax.legend(loc="best")

    plt.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=300, bbox_inches="tight")
        logger.info(f"Saved group plot to {output_path}")

    return fig
