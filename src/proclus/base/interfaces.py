"""
Core interfaces for the PROCLUS projected clustering engine.

This module defines the abstract base classes that all components must implement,
ensuring a consistent API between the dataset layer, the distance metrics and
the phases of the algorithm.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Dict, Any, List, Hashable, Iterator, Sequence, FrozenSet
import torch
from torch import Tensor


class VectorRelation(ABC):
    """Abstract base class for the dataset collaborator.

    A relation owns a fixed collection of points, each identified by a
    hashable id and holding an immutable vector of the same dimensionality.
    The clustering engine only ever reads from it.
    """

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of points in the relation."""
        pass

    @property
    @abstractmethod
    def dimensionality(self) -> int:
        """Dimensionality D of every vector."""
        pass

    @abstractmethod
    def get(self, point_id: Hashable) -> Tensor:
        """Return the (D,) vector stored under point_id."""
        pass

    @abstractmethod
    def iter_ids(self) -> Iterator[Hashable]:
        """Iterate over all ids. Restartable, always in the same order."""
        pass

    @abstractmethod
    def distance(self, id1: Hashable, id2: Hashable) -> float:
        """Distance between two stored points under the relation's metric."""
        pass

    @abstractmethod
    def range_query(self, point_id: Hashable, radius: float) -> List[Tuple[Hashable, float]]:
        """Return all (id, distance) pairs within radius of point_id.

        The query point itself is part of the result. Order is unspecified.
        """
        pass

    def vectors(self, ids: Optional[Sequence[Hashable]] = None) -> Tensor:
        """Stack the vectors of ids (all ids if None) into an (m, D) tensor."""
        if ids is None:
            ids = list(self.iter_ids())
        return torch.stack([self.get(i) for i in ids])

    def distances(self, point_id: Hashable, ids: Sequence[Hashable]) -> Tensor:
        """Distances from point_id to each of ids as an (m,) tensor."""
        return torch.tensor([self.distance(point_id, i) for i in ids],
                            dtype=torch.float64)

    def __len__(self) -> int:
        return self.size


class DistanceMetric(ABC):
    """Abstract base class for distance computations."""

    @abstractmethod
    def compute(self, points: Tensor, reference: Tensor, **kwargs) -> Tensor:
        """Compute distances from points to a single reference vector.

        Args:
            points: (n, d) tensor of points
            reference: (d,) reference vector (medoid or centroid)
            **kwargs: Metric-specific parameters

        Returns:
            (n,) tensor of distances
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for medoid initialization strategies."""

    @abstractmethod
    def select(self, relation: VectorRelation, candidates: Sequence[Hashable],
               n_medoids: int, generator: torch.Generator,
               **kwargs) -> List[Hashable]:
        """Select n_medoids distinct ids out of candidates.

        Args:
            relation: Relation holding the candidate vectors
            candidates: Ids to choose from
            n_medoids: Number of medoids to return
            generator: Run-local random source

        Returns:
            List of distinct ids, in selection order
        """
        pass


class DimensionSelector(ABC):
    """Abstract base class for choosing the correlated dimensions of entities."""

    @abstractmethod
    def select_for_medoids(self, relation: VectorRelation,
                           medoids: Sequence[Hashable]) -> 'DimensionAssignment':
        """Score dimensions on each medoid's locality."""
        pass

    @abstractmethod
    def select_for_clusters(self, relation: VectorRelation,
                            clusters: Sequence['WorkingCluster']) -> 'DimensionAssignment':
        """Score dimensions on the members of realized clusters."""
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-entity assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, representatives: Tensor,
                            dimensions: Sequence[FrozenSet[int]]) -> Tensor:
        """Compute hard assignments for points.

        Args:
            points: (n, d) tensor of data points
            representatives: (K, d) tensor, one row per entity
            dimensions: K dimension sets, aligned with representatives

        Returns:
            (n,) tensor of entity indices
        """
        pass

    @abstractmethod
    def assign(self, relation: VectorRelation, representatives: Tensor,
               assignment: 'DimensionAssignment') -> Tuple['WorkingCluster', ...]:
        """Assign every point of the relation and group the result into clusters."""
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, relation: VectorRelation,
                clusters: Sequence['WorkingCluster']) -> float:
        """Compute objective function value.

        Args:
            relation: Relation holding the clustered points
            clusters: Realized clusters with their dimension sets

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
