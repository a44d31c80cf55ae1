"""
Euclidean and Minkowski distance metrics.

Used by the relation to measure full-space distances, which set the locality
radius of each medoid and drive the greedy medoid selection.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """Euclidean distance metric.

    Computes ||x - r|| where r is the reference vector.
    """

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                    If False, return actual Euclidean distances (default).
        """
        self.squared = squared

    def compute(self, points: Tensor, reference: Tensor, **kwargs) -> Tensor:
        """Compute Euclidean distances from points to reference.

        Args:
            points: (n, d) tensor of points
            reference: (d,) reference vector

        Returns:
            (n,) tensor of distances
        """
        diff = points - reference.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=1)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"


class MinkowskiDistance(DistanceMetric):
    """Minkowski (L_p) distance.

    Computes (sum_i |x_i - r_i|^p)^(1/p). p=1 is Manhattan, p=2 Euclidean.
    """

    def __init__(self, p: float = 2.0):
        """
        Args:
            p: Order of the norm, at least 1
        """
        if p < 1:
            raise ValueError(f"Minkowski order must be >= 1, got {p}")
        self.p = float(p)

    def compute(self, points: Tensor, reference: Tensor, **kwargs) -> Tensor:
        """Compute L_p distances.

        Args:
            points: (n, d) tensor of points
            reference: (d,) reference vector

        Returns:
            (n,) tensor of distances
        """
        diff = torch.abs(points - reference.unsqueeze(0))

        if self.p == 1.0:
            return diff.sum(dim=1)
        if self.p == float('inf'):
            return diff.max(dim=1).values

        return torch.pow(torch.pow(diff, self.p).sum(dim=1), 1.0 / self.p)

    def __repr__(self) -> str:
        return f"MinkowskiDistance(p={self.p})"
