"""
Core data structures for the PROCLUS clustering engine.

Every structure here is an immutable snapshot: the iteration controller builds
fresh instances each pass and discards the old ones, so rolling back to the
best known state never needs to undo a mutation.
"""

from typing import Optional, List, Tuple, Dict, Any, FrozenSet, Hashable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
import math
import torch
from torch import Tensor


@dataclass(frozen=True)
class DimensionAssignment:
    """Correlated dimensions chosen for a sequence of entities.

    Entities are medoid ids during the iterative phase and cluster indices
    during refinement. Position i of ``dimensions`` belongs to ``entities[i]``.
    """

    entities: Tuple[Hashable, ...]
    dimensions: Tuple[FrozenSet[int], ...]

    def __post_init__(self):
        assert len(self.entities) == len(self.dimensions)

    def __len__(self) -> int:
        return len(self.entities)

    def __getitem__(self, entity: Hashable) -> FrozenSet[int]:
        try:
            return self.dimensions[self.entities.index(entity)]
        except ValueError:
            raise KeyError(entity) from None

    def items(self) -> Iterator[Tuple[Hashable, FrozenSet[int]]]:
        return zip(self.entities, self.dimensions)

    @property
    def total(self) -> int:
        """Number of (entity, dimension) pairs across all entities."""
        return sum(len(dims) for dims in self.dimensions)

    def non_empty(self) -> 'DimensionAssignment':
        """Drop entities that received no dimension."""
        kept = [(e, dims) for e, dims in self.items() if dims]
        return DimensionAssignment(
            entities=tuple(e for e, _ in kept),
            dimensions=tuple(dims for _, dims in kept)
        )


@dataclass(frozen=True, eq=False)
class WorkingCluster:
    """A cluster realized during one pass of the algorithm.

    The centroid is always the coordinate-wise mean of the members and is
    computed once, when the cluster is built.
    """

    ids: Tuple[Hashable, ...]
    dimensions: FrozenSet[int]
    centroid: Tensor
    entity: Optional[Hashable] = None  # medoid id, or entity index in refinement

    @property
    def size(self) -> int:
        return len(self.ids)


@dataclass(frozen=True, eq=False)
class SubspaceCluster:
    """Final output cluster: members, correlated dimensions and centroid."""

    name: str
    ids: Tuple[Hashable, ...]
    dimensions: Tuple[int, ...]  # sorted
    centroid: Tensor

    @property
    def size(self) -> int:
        return len(self.ids)

    def dimension_mask(self, dimensionality: int) -> Tensor:
        """Boolean (D,) mask of the correlated dimensions."""
        mask = torch.zeros(dimensionality, dtype=torch.bool)
        mask[list(self.dimensions)] = True
        return mask

    def __repr__(self) -> str:
        return (f"SubspaceCluster(name={self.name!r}, size={self.size}, "
                f"dimensions={list(self.dimensions)})")


@dataclass(frozen=True, eq=False)
class Clustering:
    """Ordered collection of subspace clusters produced by one run."""

    clusters: Tuple[SubspaceCluster, ...]
    name: str = "ProClus clustering"

    def __len__(self) -> int:
        return len(self.clusters)

    def __iter__(self) -> Iterator[SubspaceCluster]:
        return iter(self.clusters)

    def __getitem__(self, idx: int) -> SubspaceCluster:
        return self.clusters[idx]

    def sizes(self) -> List[int]:
        return [c.size for c in self.clusters]

    def centroids(self) -> Tensor:
        """(k, D) stacked centroids in output order."""
        return torch.stack([c.centroid for c in self.clusters])

    def labels(self, ids: Sequence[Hashable]) -> Tensor:
        """(n,) cluster index of each id, -1 for ids in no cluster."""
        lookup: Dict[Hashable, int] = {}
        for k, cluster in enumerate(self.clusters):
            for i in cluster.ids:
                lookup[i] = k
        return torch.tensor([lookup.get(i, -1) for i in ids], dtype=torch.long)


class Phase(Enum):
    """Phases of the iteration controller."""
    SAMPLING = 'sampling'
    ITERATING = 'iterating'
    CONVERGED = 'converged'


@dataclass(frozen=True, eq=False)
class IterationState:
    """Complete state of the iterative phase after a given pass.

    Used for step-wise execution, convergence checking, and debugging.
    """
    iteration: int
    phase: Phase
    medoids: Tuple[Hashable, ...]  # sample-derived superset
    current: Tuple[Hashable, ...]  # working set for the next pass
    best: Tuple[Hashable, ...] = ()
    bad: FrozenSet[Hashable] = frozenset()
    best_objective: float = math.inf
    objective: float = math.inf
    non_improving: int = 0
    improved: bool = False
    clusters: Tuple[WorkingCluster, ...] = ()
    best_clusters: Tuple[WorkingCluster, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def converged(self) -> bool:
        return self.phase is Phase.CONVERGED
