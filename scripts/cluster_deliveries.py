# scripts/cluster_deliveries.py
"""
Script for clustering random delivery locations with k-means.

Example usage:
    python scripts/cluster_deliveries.py --groups 3 --points 30 --seed 42 --plot groups.png
"""

from delivery_kmeans.cli import main

if __name__ == "__main__":
    exit(main())
