"""Visualization utilities for projected clustering results."""

from .plot_clusters import (
    plot_subspace_clusters_2d,
    plot_dimension_map
)

__all__ = [
    'plot_subspace_clusters_2d',
    'plot_dimension_map'
]
