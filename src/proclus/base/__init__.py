"""Base classes and interfaces for the PROCLUS clustering engine."""

from .interfaces import (
    VectorRelation,
    DistanceMetric,
    InitializationStrategy,
    DimensionSelector,
    AssignmentStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    DimensionAssignment,
    WorkingCluster,
    SubspaceCluster,
    Clustering,
    Phase,
    IterationState
)

from .clustering_base import BaseProjectedClustering

__all__ = [
    # Interfaces
    'VectorRelation',
    'DistanceMetric',
    'InitializationStrategy',
    'DimensionSelector',
    'AssignmentStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'DimensionAssignment',
    'WorkingCluster',
    'SubspaceCluster',
    'Clustering',
    'Phase',
    'IterationState',

    # Base algorithm
    'BaseProjectedClustering'
]
