# delivery_kmeans/cli.py
"""
Command line interface for clustering random delivery locations.

Example usage:
    delivery-kmeans --groups 3 --points 30 --seed 42 --output groups.json --plot groups.png
"""

# Standard Library Imports
import argparse
from pathlib import Path
from typing import List, Optional

# Third Party Imports
import matplotlib.pyplot as plt

# Internal Imports
from delivery_kmeans.core.exceptions.clustering import ClusteringError
from delivery_kmeans.core.models.spatial import BoundingBox
from delivery_kmeans.core.services.clustering import KMeansConfig, run_clustering
from delivery_kmeans.utils.constants import (
    DEFAULT_COORDINATE_PRECISION,
    DEFAULT_ITERATION_LIMIT,
    DEFAULT_MAX_LAT,
    DEFAULT_MAX_LNG,
    DEFAULT_MIN_LAT,
    DEFAULT_MIN_LNG,
    DEFAULT_N_GROUPS,
    DEFAULT_N_POINTS,
    EmptyGroupPolicy,
)
from delivery_kmeans.utils.logging import get_logger, setup_logging
from delivery_kmeans.utils.visualization import plot_groups

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Cluster random delivery locations with k-means",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--groups", type=int, default=DEFAULT_N_GROUPS, help="Number of groups (K)"
    )
    parser.add_argument(
        "--points",
        type=int,
        default=DEFAULT_N_POINTS,
        help="Number of delivery points to generate (N)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_ITERATION_LIMIT,
        help="Maximum number of iterations before giving up",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--bounds",
        type=float,
        nargs=4,
        metavar=("MIN_LAT", "MAX_LAT", "MIN_LNG", "MAX_LNG"),
        default=[DEFAULT_MIN_LAT, DEFAULT_MAX_LAT, DEFAULT_MIN_LNG, DEFAULT_MAX_LNG],
        help="Area to generate points in",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=DEFAULT_COORDINATE_PRECISION,
        help="Decimal places to round generated coordinates to",
    )
    parser.add_argument(
        "--empty-policy",
        type=str,
        choices=[policy.value for policy in EmptyGroupPolicy],
        default=EmptyGroupPolicy.KEEP.value,
        help="What to do with a group that receives no points",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Absolute convergence tolerance (exact equality when omitted)",
    )
    parser.add_argument(
        "--output", type=str, default=None, help="Path to write the result as JSON"
    )
    parser.add_argument(
        "--plot", type=str, default=None, help="Path to save a plot of the groups"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run one clustering and report the groups."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        min_lat, max_lat, min_lng, max_lng = args.bounds
        config = KMeansConfig(
            n_groups=args.groups,
            n_points=args.points,
            bounding_box=BoundingBox(
                min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng
            ),
            iteration_limit=args.limit,
            random_state=args.seed,
            coordinate_precision=args.precision,
            empty_group_policy=EmptyGroupPolicy(args.empty_policy),
            convergence_tolerance=args.tolerance,
        )
        result = run_clustering(config)
    except ClusteringError as e:
        logger.error(f"Clustering failed: {str(e)}")
        return 1

    print(f"Converged after {result.iterations} iterations")
    for index, group in enumerate(result.groups, start=1):
        print(f"Group {index}: centroid ({group.lat:.6f}, {group.lng:.6f}), {len(group)} points")

    if args.output:
        Path(args.output).write_text(result.model_dump_json(indent=2))
        logger.info(f"Saved result to {args.output}")

    if args.plot:
        fig = plot_groups(
            result.groups,
            points=result.points,
            title=f"K-means groups (K={args.groups}, N={args.points})",
            output_path=args.plot,
        )
        plt.close(fig)

    return 0


if __name__ == "__main__":
    exit(main())
