"""
Base class for projected clustering algorithms.

Provides the common algorithmic skeleton: an initialization phase, a
step-wise iterative phase driven by a convergence criterion, and a final
refinement phase that produces the output clustering.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import time
import torch
from torch import Tensor
import numpy as np

from .interfaces import (
    VectorRelation, InitializationStrategy, DimensionSelector,
    AssignmentStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import Clustering, IterationState, Phase
from ..utils.device import parse_device
from ..utils.validation import check_positive_int, validate_data

DataLike = Union[VectorRelation, Tensor, np.ndarray, list]


class BaseProjectedClustering:
    """Base class implementing the three-phase projected clustering framework.

    Subclasses need to specify:
    - Medoid initialization strategies
    - Dimension selector
    - Assignment strategy
    - Convergence criterion
    - Objective function

    and implement ``start``, ``step`` and ``finalize``. ``fit`` runs them to
    completion; callers that need a wall-clock bound can drive the steps
    themselves and call ``finalize`` whenever they choose to stop.
    """

    def __init__(self,
                 n_clusters: int,
                 l: int,
                 k_i: int = 30,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[Union[str, torch.device]] = None):
        """
        Args:
            n_clusters: Number of clusters K
            l: Average number of correlated dimensions per cluster L
            k_i: Sample multiplier, the sample holds min(n, k_i * K) points
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for reproducibility, None for a
                non-deterministic run
            device: Torch device (None for CPU)
        """
        check_positive_int(n_clusters, 'n_clusters')
        check_positive_int(l, 'l')
        check_positive_int(k_i, 'k_i')

        self.n_clusters = n_clusters
        self.l = l
        self.k_i = k_i
        self.verbose = verbose
        self.random_state = random_state
        self.device = parse_device(device)

        # These will be set by subclasses
        self.medoid_strategy: Optional[InitializationStrategy] = None
        self.working_set_strategy: Optional[InitializationStrategy] = None
        self.dimension_selector: Optional[DimensionSelector] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.fitted_ = False
        self.n_iter_ = 0
        self.history_: List[IterationState] = []
        self.state_: Optional[IterationState] = None
        self.relation_: Optional[VectorRelation] = None
        self.clustering_: Optional[Clustering] = None

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.medoid_strategy
        - self.working_set_strategy
        - self.dimension_selector
        - self.assignment_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    @abstractmethod
    def start(self, X: DataLike) -> IterationState:
        """Run the initialization phase and return the first state."""
        pass

    @abstractmethod
    def step(self) -> IterationState:
        """Run one pass of the iterative phase and return the new state."""
        pass

    @abstractmethod
    def finalize(self) -> Clustering:
        """Run the refinement phase on the best state and build the result."""
        pass

    @property
    def phase(self) -> Phase:
        """Current phase of the controller."""
        if self.state_ is None:
            return Phase.SAMPLING
        return self.state_.phase

    @property
    def converged(self) -> bool:
        return self.state_ is not None and self.state_.converged

    def fit(self, X: DataLike, y: Optional[Tensor] = None) -> 'BaseProjectedClustering':
        """Fit the clustering model.

        Args:
            X: (n, d) data or a VectorRelation
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        start_time = time.time()

        state = self.start(X)

        while not state.converged:
            iter_start_time = time.time()
            state = self.step()

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2:
                marker = "*" if state.improved else " "
                print(f"Iteration {state.iteration:3d}: objective = {state.objective:.6f} "
                      f"{marker} best = {state.best_objective:.6f}, "
                      f"clusters = {len(state.clusters)}, bad medoids = {len(state.bad)} "
                      f"({iter_time:.3f}s)")

        if self.verbose:
            print(f"Converged after {state.iteration} iterations "
                  f"(best objective {state.best_objective:.6f})")

        self.finalize()

        if self.verbose:
            print(f"Total fitting time: {time.time() - start_time:.3f}s")

        return self

    def fit_predict(self, X: DataLike, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return cluster assignments.

        Args:
            X: (n, d) data or a VectorRelation
            y: Ignored

        Returns:
            (n,) tensor of cluster indices in output order
        """
        self.fit(X)
        return self.labels_

    @property
    def labels_(self) -> Tensor:
        """Cluster index of every point of the fitted relation, -1 if unassigned."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.clustering_.labels(list(self.relation_.iter_ids()))

    @property
    def cluster_centers_(self) -> Tensor:
        """Get final cluster centroids."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.clustering_.centroids()

    @property
    def objective_(self) -> float:
        """Best objective value reached in the iterative phase."""
        if self.state_ is None:
            raise RuntimeError("Model must be started first")
        return self.state_.best_objective

    def _validate_data(self, X: Union[Tensor, np.ndarray, list]) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, device=self.device)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'l': self.l,
            'k_i': self.k_i,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseProjectedClustering':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            setattr(self, key, value)
        return self
