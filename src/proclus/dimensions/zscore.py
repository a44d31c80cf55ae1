"""
Z-score dimension selection.

For every entity (a medoid with its locality, or a realized cluster with its
members) the average absolute spread along each dimension is turned into a
z-score against that entity's own mean spread. The globally lowest z-scores
win: those are the dimensions along which an entity is unusually tight.
"""

from typing import List, Hashable, Sequence, Set
import math
import warnings
import torch
from torch import Tensor

from ..base.interfaces import DimensionSelector, VectorRelation
from ..base.data_structures import DimensionAssignment, WorkingCluster


def average_spread(points: Tensor, reference: Tensor) -> Tensor:
    """Mean absolute difference to reference along every dimension.

    Args:
        points: (m, d) points, m may be 0
        reference: (d,) medoid or centroid

    Returns:
        (d,) spreads; all zero when there are no points
    """
    if points.shape[0] == 0:
        return torch.zeros_like(reference)
    return torch.abs(points - reference.unsqueeze(0)).mean(dim=0)


def spread_zscores(spreads: Tensor) -> Tensor:
    """Row-wise z-scores of a (K, d) spread matrix.

    The deviation uses d - 1 in the denominator. Rows whose deviation is zero
    or undefined (d < 2) get z = 0 everywhere: all their dimensions are
    equally relevant.
    """
    n_entities, dim = spreads.shape
    mean = spreads.mean(dim=1, keepdim=True)

    if dim < 2:
        sigma = torch.zeros_like(mean)
    else:
        sigma = torch.sqrt(((spreads - mean) ** 2).sum(dim=1, keepdim=True) / (dim - 1))

    degenerate = sigma <= 0
    if degenerate.any():
        warnings.warn(f"{int(degenerate.sum().item())} of {n_entities} entities have "
                      f"zero spread deviation; treating their dimensions as equally relevant")

    safe_sigma = torch.where(degenerate, torch.ones_like(sigma), sigma)
    return torch.where(degenerate, torch.zeros_like(spreads), (spreads - mean) / safe_sigma)


class ZScoreDimensionSelector(DimensionSelector):
    """Pick the max(K * L, 2) lowest (z, entity, dimension) triples.

    Args:
        n_clusters: Target number of clusters K
        l: Average number of dimensions per cluster L
    """

    def __init__(self, n_clusters: int, l: int):
        self.n_clusters = n_clusters
        self.l = l

    @property
    def n_pairs(self) -> int:
        """Number of (entity, dimension) pairs handed out per selection."""
        return max(self.n_clusters * self.l, 2)

    def localities(self, relation: VectorRelation,
                   medoids: Sequence[Hashable]) -> List[List[Hashable]]:
        """Ids within each medoid's distance to its nearest other medoid.

        A lone medoid has no neighbour; its locality is the whole relation.
        The medoid always belongs to its own locality.
        """
        result = []
        for m in medoids:
            others = [o for o in medoids if o != m]
            if others:
                radius = relation.distances(m, others).min().item()
            else:
                radius = math.inf

            ids = [point_id for point_id, _ in relation.range_query(m, radius)]
            if m not in set(ids):
                ids.append(m)
            result.append(ids)

        return result

    def select_for_medoids(self, relation: VectorRelation,
                           medoids: Sequence[Hashable]) -> DimensionAssignment:
        """Choose correlated dimensions from medoid localities.

        Args:
            relation: Relation holding the points
            medoids: Current working medoids

        Returns:
            Assignment keyed by medoid id, in medoid order
        """
        medoids = list(medoids)
        spreads = []
        for m, locality in zip(medoids, self.localities(relation, medoids)):
            spreads.append(average_spread(relation.vectors(locality), relation.get(m)))

        return self._select(medoids, torch.stack(spreads))

    def select_for_clusters(self, relation: VectorRelation,
                            clusters: Sequence[WorkingCluster]) -> DimensionAssignment:
        """Choose correlated dimensions from cluster members around centroids.

        Returns:
            Assignment keyed by cluster index, in cluster order
        """
        spreads = []
        for cluster in clusters:
            members = relation.vectors(list(cluster.ids)) if cluster.size else \
                cluster.centroid.new_zeros((0, cluster.centroid.shape[0]))
            spreads.append(average_spread(members, cluster.centroid))

        return self._select(list(range(len(clusters))), torch.stack(spreads))

    def _select(self, entities: List[Hashable], spreads: Tensor) -> DimensionAssignment:
        """Hand out the lowest z-scores to their entities."""
        n_entities, dim = spreads.shape
        z = spread_zscores(spreads)

        # Row-major flattening plus a stable sort breaks ties by entity
        # order first, then by dimension
        order = torch.sort(z.flatten(), stable=True).indices
        n_take = min(self.n_pairs, order.numel())

        chosen: List[Set[int]] = [set() for _ in range(n_entities)]
        for flat_idx in order[:n_take].tolist():
            chosen[flat_idx // dim].add(flat_idx % dim)

        return DimensionAssignment(
            entities=tuple(entities),
            dimensions=tuple(frozenset(dims) for dims in chosen)
        )
