"""Distance metrics for projected clustering."""

from .euclidean import EuclideanDistance, MinkowskiDistance
from .segmental import ManhattanSegmentalDistance

__all__ = [
    # Full-space distances
    'EuclideanDistance',
    'MinkowskiDistance',

    # Subspace distances
    'ManhattanSegmentalDistance'
]
