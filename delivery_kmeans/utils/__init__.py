# delivery_kmeans/utils/__init__.py
"""
Utility functions and classes for the application.
"""

from delivery_kmeans.utils.logging import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
]
