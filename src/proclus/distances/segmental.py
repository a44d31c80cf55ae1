"""
Manhattan segmental distance.

The distance PROCLUS uses to assign points: the mean absolute coordinate
difference over a cluster-specific subset of dimensions. Normalizing by the
size of the subset (not by D) keeps clusters with different numbers of
correlated dimensions comparable.
"""

from typing import Iterable, Optional
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


def dimension_index(dimensions: Iterable[int], device: Optional[torch.device] = None) -> Tensor:
    """Sorted long tensor of dimension indices."""
    return torch.tensor(sorted(dimensions), dtype=torch.long, device=device)


class ManhattanSegmentalDistance(DistanceMetric):
    """Mean absolute difference restricted to a set of dimensions.

    An empty dimension set yields +inf for every point, so an entity that
    received no dimension never attracts a point.
    """

    def __init__(self, dimensions: Optional[Iterable[int]] = None):
        """
        Args:
            dimensions: Default dimension set; may be overridden per call
        """
        self.dimensions = frozenset(dimensions) if dimensions is not None else None

    def compute(self, points: Tensor, reference: Tensor,
                dimensions: Optional[Iterable[int]] = None, **kwargs) -> Tensor:
        """Compute segmental distances from points to reference.

        Args:
            points: (n, d) tensor of points
            reference: (d,) reference vector (medoid or centroid)
            dimensions: Dimensions to compare on

        Returns:
            (n,) tensor of distances
        """
        if dimensions is None:
            dimensions = self.dimensions
        if dimensions is None:
            raise ValueError("Manhattan segmental distance requires a dimension set")

        dims = dimension_index(dimensions, device=points.device)

        if dims.numel() == 0:
            return torch.full((points.shape[0],), float('inf'),
                              dtype=points.dtype, device=points.device)

        diff = points.index_select(1, dims) - reference.index_select(0, dims).unsqueeze(0)
        return torch.abs(diff).mean(dim=1)

    def __repr__(self) -> str:
        dims = sorted(self.dimensions) if self.dimensions is not None else None
        return f"ManhattanSegmentalDistance(dimensions={dims})"
