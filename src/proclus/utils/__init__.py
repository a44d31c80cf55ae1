"""Utility functions for the PROCLUS clustering engine."""

from .convergence import NonImprovement

from .metrics import (
    clustering_to_labels,
    contingency_matrix,
    pair_counting_f_measure,
    adjusted_rand_score
)

from .validation import (
    validate_data,
    check_positive_int,
    check_n_clusters,
    check_subspace_dim,
    check_sample_sizes,
    check_random_state
)

from .device import (
    get_default_device,
    parse_device
)

__all__ = [
    # Convergence criteria
    'NonImprovement',

    # Metrics
    'clustering_to_labels',
    'contingency_matrix',
    'pair_counting_f_measure',
    'adjusted_rand_score',

    # Validation
    'validate_data',
    'check_positive_int',
    'check_n_clusters',
    'check_subspace_dim',
    'check_sample_sizes',
    'check_random_state',

    # Device management
    'get_default_device',
    'parse_device'
]
