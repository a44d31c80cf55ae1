"""
Hard assignment under Manhattan segmental distance.

Assigns each point to the entity (medoid or centroid) that is nearest when
only that entity's own correlated dimensions are compared.
"""

from typing import List, Tuple, Hashable, Sequence, FrozenSet
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, VectorRelation
from ..base.data_structures import DimensionAssignment, WorkingCluster
from ..distances.segmental import ManhattanSegmentalDistance


class SegmentalAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to the nearest entity.

    Each point is assigned to exactly one entity based on minimum segmental
    distance. Ties go to the entity that comes first.
    """

    def __init__(self):
        self.metric = ManhattanSegmentalDistance()

    def distance_matrix(self, points: Tensor, representatives: Tensor,
                        dimensions: Sequence[FrozenSet[int]]) -> Tensor:
        """(n, K) segmental distances from points to every representative."""
        n_points = points.shape[0]
        n_entities = representatives.shape[0]

        distances = torch.empty(n_points, n_entities, dtype=points.dtype, device=points.device)
        for k in range(n_entities):
            distances[:, k] = self.metric.compute(points, representatives[k],
                                                  dimensions=dimensions[k])
        return distances

    def compute_assignments(self, points: Tensor, representatives: Tensor,
                            dimensions: Sequence[FrozenSet[int]]) -> Tensor:
        """Assign each point to its nearest representative.

        Args:
            points: (n, d) data points
            representatives: (K, d) medoid vectors or centroids
            dimensions: K dimension sets, one per representative

        Returns:
            (n,) tensor of entity indices
        """
        if representatives.shape[0] != len(dimensions):
            raise ValueError(f"Got {representatives.shape[0]} representatives but "
                             f"{len(dimensions)} dimension sets")

        distances = self.distance_matrix(points, representatives, dimensions)

        # argmin returns the first minimal index
        return torch.argmin(distances, dim=1)

    def assign(self, relation: VectorRelation, representatives: Tensor,
               assignment: DimensionAssignment) -> Tuple[WorkingCluster, ...]:
        """Partition the whole relation and build the non-empty clusters.

        Args:
            relation: Relation holding every point
            representatives: (K, d) vectors in assignment entity order
            assignment: Dimension sets of the K entities

        Returns:
            Clusters in entity order; entities that attracted no point are
            dropped
        """
        ids = list(relation.iter_ids())
        points = relation.vectors(ids)
        labels = self.compute_assignments(points, representatives.to(points.device),
                                          assignment.dimensions)
        return build_clusters(ids, points, labels, assignment)


def build_clusters(ids: Sequence[Hashable], points: Tensor, labels: Tensor,
                   assignment: DimensionAssignment) -> Tuple[WorkingCluster, ...]:
    """Turn hard labels into fresh WorkingClusters.

    Centroids are recomputed from scratch as the mean of the members.
    """
    clusters: List[WorkingCluster] = []
    for k, (entity, dims) in enumerate(assignment.items()):
        members = torch.nonzero(labels == k, as_tuple=True)[0]
        if members.numel() == 0:
            continue
        member_ids = tuple(ids[i] for i in members.tolist())
        centroid = points.index_select(0, members).mean(dim=0)
        clusters.append(WorkingCluster(ids=member_ids, dimensions=dims,
                                       centroid=centroid, entity=entity))
    return tuple(clusters)
