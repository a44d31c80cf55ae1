"""Point-to-cluster assignment strategies."""

from .segmental import SegmentalAssignment, build_clusters

__all__ = [
    'SegmentalAssignment',
    'build_clusters'
]
