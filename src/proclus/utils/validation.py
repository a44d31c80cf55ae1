"""
Input validation and parameter checking utilities.

Provides functions for validating data and parameters before clustering,
including handling of edge cases, data type conversion, and sanity checks.
Every check here runs before any random sampling takes place.
"""

from typing import Optional, Union, Tuple
import torch
from torch import Tensor
import numpy as np


def validate_data(X: Union[Tensor, np.ndarray, list],
                 dtype: torch.dtype = torch.float64,
                 device: Optional[torch.device] = None,
                 ensure_2d: bool = True,
                 ensure_finite: bool = True,
                 ensure_min_samples: int = 1,
                 ensure_min_features: int = 1,
                 copy: bool = False) -> Tensor:
    """Validate and convert input data to tensor.

    Args:
        X: Input data (tensor, numpy array, or list)
        dtype: Target data type
        device: Target device
        ensure_2d: Whether to ensure 2D shape
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required
        copy: Whether to force a copy

    Returns:
        Validated tensor

    Raises:
        ValueError: If validation fails
    """
    # Convert to tensor
    if isinstance(X, Tensor):
        if copy or X.dtype != dtype or (device is not None and X.device != device):
            X = X.to(dtype=dtype, device=device, copy=copy)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype, device=device)
    elif isinstance(X, list):
        X = torch.tensor(X, dtype=dtype, device=device)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    # Ensure 2D
    if ensure_2d:
        if X.dim() == 1:
            X = X.unsqueeze(1)
        elif X.dim() != 2:
            raise ValueError(f"Expected 2D array, got {X.dim()}D")

    # Check shape
    if ensure_2d:
        n_samples, n_features = X.shape

        if n_samples < ensure_min_samples:
            raise ValueError(f"Found {n_samples} samples, but need at least "
                           f"{ensure_min_samples}")

        if n_features < ensure_min_features:
            raise ValueError(f"Found {n_features} features, but need at least "
                           f"{ensure_min_features}")

    # Check for finite values
    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def check_positive_int(value: int, name: str) -> None:
    """Raise unless value is a strictly positive integer."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be int, got {type(value)}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        ValueError: If invalid
    """
    check_positive_int(n_clusters, 'n_clusters')

    if n_clusters > n_samples:
        raise ValueError(f"n_clusters ({n_clusters}) cannot be larger than "
                        f"n_samples ({n_samples})")


def check_subspace_dim(l: int, dimensionality: int) -> None:
    """Validate the average number of dimensions per cluster.

    Raises:
        ValueError: If l exceeds the dimensionality of the data
    """
    check_positive_int(l, 'l')

    if dimensionality < l:
        raise ValueError(f"Dimensionality of data < parameter l! "
                        f"({dimensionality} < {l})")


def check_sample_sizes(n_samples: int, n_clusters: int, k_i: int,
                      m_i: int) -> Tuple[int, int]:
    """Compute and validate the sample and medoid superset sizes.

    Args:
        n_samples: Number of points in the relation
        n_clusters: Target number of clusters K
        k_i: Sample multiplier
        m_i: Medoid superset multiplier

    Returns:
        (sample_size, medoid_size)

    Raises:
        ValueError: If the greedy selection or the initial working set would
            need more distinct points than the pool holds
    """
    check_positive_int(k_i, 'k_i')
    check_positive_int(m_i, 'm_i')

    sample_size = min(n_samples, k_i * n_clusters)
    medoid_size = min(n_samples, m_i * n_clusters)

    if medoid_size > sample_size:
        raise ValueError(f"Cannot select {medoid_size} medoids from a sample of "
                        f"{sample_size} points; increase k_i or decrease m_i")

    if n_clusters > medoid_size:
        raise ValueError(f"Cannot draw {n_clusters} working medoids from "
                        f"{medoid_size} candidates")

    return sample_size, medoid_size


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create a run-local generator from random state.

    Args:
        random_state: Seed, generator, or None for a non-deterministic run

    Returns:
        Generator
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")
