"""
PROCLUS: projected clustering for high-dimensional data.

This package implements the PROCLUS subspace clustering algorithm on PyTorch
tensors. Each cluster it finds is compact only along its own subset of
"correlated" dimensions, which lets it separate clusters that global
distances blur together.

Example usage:
    >>> import torch
    >>> from proclus import PROCLUS
    >>>
    >>> # Generate sample data
    >>> X = torch.randn(1000, 10)
    >>>
    >>> # Fit PROCLUS with 5 clusters, 3 dimensions per cluster on average
    >>> model = PROCLUS(n_clusters=5, l=3, random_state=0)
    >>> model.fit(X)
    >>>
    >>> # Inspect the subspace clusters
    >>> for cluster in model.clustering_:
    ...     print(cluster.name, cluster.size, cluster.dimensions)
"""

__version__ = '0.1.0'

# Import main algorithm
from .algorithms.proclus import PROCLUS, ProclusObjective

# Dataset relations
from .relations import TensorRelation, as_relation

# Convenience imports
from .base import (
    VectorRelation,
    DimensionAssignment,
    WorkingCluster,
    SubspaceCluster,
    Clustering,
    IterationState,
    Phase
)

# Import visualization
from .visualization import (
    plot_subspace_clusters_2d,
    plot_dimension_map
)

__all__ = [
    # Algorithms
    'PROCLUS',
    'ProclusObjective',

    # Relations
    'VectorRelation',
    'TensorRelation',
    'as_relation',

    # Core data structures
    'DimensionAssignment',
    'WorkingCluster',
    'SubspaceCluster',
    'Clustering',
    'IterationState',
    'Phase',

    # Visualization
    'plot_subspace_clusters_2d',
    'plot_dimension_map',

    # Version
    '__version__'
]
