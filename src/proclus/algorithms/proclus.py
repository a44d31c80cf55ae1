"""
PROCLUS: PROjected CLUStering.

Medoid-based subspace clustering as described in

    C. C. Aggarwal, C. Procopiuc, J. L. Wolf, P. S. Yu, J. S. Park:
    Fast Algorithms for Projected Clustering.
    In: Proc. ACM SIGMOD Int. Conf. on Management of Data (SIGMOD '99).

implemented using the modular framework.
"""

from typing import Optional, Hashable, Sequence, FrozenSet, Tuple, Union, Dict, Any
import torch
from torch import Tensor
import numpy as np

from ..base.clustering_base import BaseProjectedClustering, DataLike
from ..base.interfaces import ClusteringObjective, VectorRelation
from ..base.data_structures import (
    Clustering, SubspaceCluster, WorkingCluster, IterationState, Phase
)
from ..relations.tensor_relation import as_relation
from ..initialization.greedy import GreedyPiercingInit
from ..initialization.random import RandomInit, random_sample
from ..dimensions.zscore import ZScoreDimensionSelector
from ..assignments.segmental import SegmentalAssignment
from ..distances.segmental import dimension_index
from ..utils.convergence import NonImprovement
from ..utils.validation import (
    check_n_clusters, check_positive_int, check_sample_sizes,
    check_subspace_dim, check_random_state
)


class ProclusObjective(ClusteringObjective):
    """PROCLUS objective: size-weighted mean segmental spread.

    For every cluster the mean absolute deviation from the centroid is taken
    along each of its dimensions, averaged over those dimensions, weighted by
    the cluster size; the total is divided by the number of points.
    """

    def compute(self, relation: VectorRelation,
                clusters: Sequence[WorkingCluster]) -> float:
        """Compute the weighted segmental spread of a clustering."""
        total = 0.0

        for cluster in clusters:
            if cluster.size == 0 or not cluster.dimensions:
                continue
            dims = dimension_index(cluster.dimensions, device=cluster.centroid.device)
            members = relation.vectors(list(cluster.ids)).index_select(1, dims)
            center = cluster.centroid.index_select(0, dims)

            # mean over members per dimension, then mean over dimensions
            w = torch.abs(members - center.unsqueeze(0)).mean(dim=0).mean()
            total += cluster.size * w.item()

        return total / relation.size

    @property
    def minimize(self) -> bool:
        return True


def compute_bad_medoids(medoids: Sequence[Hashable],
                        clusters: Sequence[WorkingCluster],
                        threshold: float) -> FrozenSet[Hashable]:
    """Medoids whose cluster holds fewer than threshold points.

    A medoid that attracted no point at all has no realized cluster and is
    bad as well.
    """
    sizes = {cluster.entity: cluster.size for cluster in clusters}
    return frozenset(m for m in medoids if sizes.get(m, 0) < threshold)


def next_working_set(medoids: Sequence[Hashable],
                     best: Sequence[Hashable],
                     bad: FrozenSet[Hashable],
                     generator: torch.Generator) -> Tuple[Hashable, ...]:
    """Replace every bad medoid of the best set by a random unused one.

    Args:
        medoids: The greedy medoid superset
        best: Best working set found so far
        bad: Bad medoids of the best set
        generator: Run-local random source

    Returns:
        Next working set, same size as best

    Raises:
        ValueError: If the superset runs out of replacement candidates
    """
    best_set = set(best)
    unused = [m for m in medoids if m not in best_set]

    current = []
    for m in best:
        if m in bad:
            if not unused:
                raise ValueError(f"Medoid pool exhausted: {len(bad)} bad medoids but only "
                                 f"{len(medoids) - len(best)} spare medoids in the superset; "
                                 f"increase m_i")
            idx = int(torch.randint(len(unused), (1,), generator=generator).item())
            current.append(unused.pop(idx))
        else:
            current.append(m)

    return tuple(current)


class PROCLUS(BaseProjectedClustering):
    """PROCLUS projected clustering.

    Finds K clusters, each compact along its own subset of dimensions, using
    a randomized local search over medoids.

    Parameters
    ----------
    n_clusters : int
        Number of clusters K
    l : int
        Average number of correlated dimensions per cluster, at most the
        dimensionality of the data
    k_i : int, default=30
        Sample multiplier; min(n, k_i * K) points are sampled
    m_i : int, default=10
        Medoid superset multiplier; min(n, m_i * K) medoids are chosen
        greedily from the sample
    max_non_improving : int, default=10
        Number of consecutive non-improving iterations before stopping
    bad_medoid_fraction : float, default=0.1
        A medoid is bad if its cluster holds fewer than
        bad_medoid_fraction * n / K points
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Random seed for reproducibility
    device : str or torch.device, optional
        Device for computation (CPU if None)

    Attributes
    ----------
    clustering_ : Clustering
        Final subspace clusters
    labels_ : Tensor of shape (n_samples,)
        Cluster index of every point of the training data
    cluster_centers_ : Tensor of shape (n_output_clusters, n_features)
        Centroids of the final clusters
    medoids_ : tuple
        Best medoid set found in the iterative phase
    objective_ : float
        Best objective reached in the iterative phase
    n_iter_ : int
        Number of iterations run
    history_ : list of IterationState
        Snapshot after initialization and after every iteration
    """

    def __init__(self,
                 n_clusters: int,
                 l: int,
                 k_i: int = 30,
                 m_i: int = 10,
                 max_non_improving: int = 10,
                 bad_medoid_fraction: float = 0.1,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[Union[str, torch.device]] = None):
        """Initialize PROCLUS."""
        super().__init__(
            n_clusters=n_clusters,
            l=l,
            k_i=k_i,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        check_positive_int(m_i, 'm_i')
        check_positive_int(max_non_improving, 'max_non_improving')
        if not 0.0 <= bad_medoid_fraction < 1.0:
            raise ValueError(f"bad_medoid_fraction must be in [0, 1), "
                             f"got {bad_medoid_fraction}")

        self.m_i = m_i
        self.max_non_improving = max_non_improving
        self.bad_medoid_fraction = bad_medoid_fraction

        self._generator: Optional[torch.Generator] = None

    def _create_components(self) -> None:
        """Create PROCLUS specific components."""
        self.medoid_strategy = GreedyPiercingInit()
        self.working_set_strategy = RandomInit()
        self.dimension_selector = ZScoreDimensionSelector(self.n_clusters, self.l)
        self.assignment_strategy = SegmentalAssignment()
        self.convergence_criterion = NonImprovement(patience=self.max_non_improving)
        self.objective = ProclusObjective()

    def start(self, X: DataLike) -> IterationState:
        """Initialization phase.

        Samples candidates, picks the greedy medoid superset and draws the
        first working set.

        Raises:
            ValueError: If l exceeds the dimensionality or the sample cannot
                supply enough medoids; nothing is sampled in that case
        """
        self.fitted_ = False
        self.clustering_ = None
        self.state_ = None
        self.history_ = []
        self.n_iter_ = 0
        self.relation_ = None

        relation = as_relation(X, device=self.device)
        n_points = relation.size

        check_subspace_dim(self.l, relation.dimensionality)
        check_n_clusters(self.n_clusters, n_points)
        sample_size, medoid_size = check_sample_sizes(
            n_points, self.n_clusters, self.k_i, self.m_i
        )

        self._create_components()
        self.relation_ = relation
        self._generator = check_random_state(self.random_state)

        if self.verbose:
            print("1. Initialization phase...")

        sample = random_sample(list(relation.iter_ids()), sample_size, self._generator)
        medoids = self.medoid_strategy.select(relation, sample, medoid_size, self._generator)
        current = self.working_set_strategy.select(relation, medoids, self.n_clusters,
                                                   self._generator)

        if self.verbose >= 2:
            print(f"sampleSize {sample_size}, medoidSize {medoid_size}")
            print(f"m_c {list(current)}")

        if self.verbose:
            print("2. Iterative phase...")

        state = IterationState(
            iteration=0,
            phase=Phase.ITERATING,
            medoids=tuple(medoids),
            current=tuple(current),
            metadata={'sample_size': sample_size, 'medoid_size': medoid_size}
        )

        self.convergence_criterion.reset()
        self.state_ = state
        self.history_ = [state]
        self.n_iter_ = 0
        return state

    def step(self) -> IterationState:
        """One pass: dimensions, assignment, evaluation, medoid replacement."""
        state = self.state_
        if state is None:
            raise RuntimeError("Call start() before step()")
        if state.converged:
            return state

        relation = self.relation_
        iteration = state.iteration + 1

        dimensions = self.dimension_selector.select_for_medoids(relation, state.current)
        representatives = relation.vectors(list(dimensions.entities))
        clusters = self.assignment_strategy.assign(relation, representatives, dimensions)
        objective = self.objective.compute(relation, clusters)

        if objective < state.best_objective:
            improved = True
            best = state.current
            best_objective = objective
            best_clusters = clusters
            threshold = relation.size * self.bad_medoid_fraction / self.n_clusters
            bad = compute_bad_medoids(best, clusters, threshold)
            non_improving = 0
        else:
            improved = False
            best = state.best
            best_objective = state.best_objective
            best_clusters = state.best_clusters
            bad = state.bad
            non_improving = state.non_improving + 1

        converged = self.convergence_criterion.check({
            'iteration': iteration,
            'objective': objective,
            'best_objective': best_objective,
            'non_improving': non_improving
        })

        if converged:
            current = best
        else:
            current = next_working_set(state.medoids, best, bad, self._generator)

        new_state = IterationState(
            iteration=iteration,
            phase=Phase.CONVERGED if converged else Phase.ITERATING,
            medoids=state.medoids,
            current=current,
            best=best,
            bad=bad,
            best_objective=best_objective,
            objective=objective,
            non_improving=non_improving,
            improved=improved,
            clusters=clusters,
            best_clusters=best_clusters,
            metadata={'dimensions': dimensions}
        )

        self.state_ = new_state
        self.history_.append(new_state)
        self.n_iter_ = iteration
        return new_state

    def finalize(self) -> Clustering:
        """Refinement phase.

        Recomputes dimensions on the best clusters, reassigns every point to
        the resulting centroids and packages the non-empty partitions.
        """
        state = self.state_
        if state is None:
            raise RuntimeError("Call start() before finalize()")
        if not state.best_clusters:
            raise RuntimeError("finalize() needs at least one completed step()")

        if self.verbose:
            print("3. Refinement phase...")

        relation = self.relation_
        best_clusters = state.best_clusters

        dimensions = self.dimension_selector.select_for_clusters(relation, best_clusters)
        dimensions = dimensions.non_empty()
        centroids = torch.stack([best_clusters[i].centroid for i in dimensions.entities])
        final_clusters = self.assignment_strategy.assign(relation, centroids, dimensions)

        result = []
        for number, cluster in enumerate(final_clusters, start=1):
            result.append(SubspaceCluster(
                name=f"cluster_{number}",
                ids=cluster.ids,
                dimensions=tuple(sorted(cluster.dimensions)),
                centroid=cluster.centroid
            ))

        self.clustering_ = Clustering(clusters=tuple(result))
        self.fitted_ = True

        if self.verbose:
            print(f"Found {len(self.clustering_)} clusters with sizes "
                  f"{self.clustering_.sizes()}")

        return self.clustering_

    @property
    def medoids_(self) -> Tuple[Hashable, ...]:
        """Best medoid set found in the iterative phase."""
        if self.state_ is None:
            raise RuntimeError("Model must be started first")
        return self.state_.best

    def predict(self, X: Union[Tensor, np.ndarray, list]) -> Tensor:
        """Assign new points to the final clusters.

        Each point goes to the cluster whose centroid is nearest under the
        Manhattan segmental distance on that cluster's dimensions.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            New data to predict

        Returns
        -------
        labels : Tensor of shape (n_samples,)
            Cluster indices in output order
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        X = self._validate_data(X)
        if X.shape[1] != self.relation_.dimensionality:
            raise ValueError(f"Expected {self.relation_.dimensionality} features, "
                             f"got {X.shape[1]}")

        dimensions = [frozenset(c.dimensions) for c in self.clustering_]
        centroids = self.clustering_.centroids().to(device=X.device, dtype=X.dtype)
        return self.assignment_strategy.compute_assignments(X, centroids, dimensions)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        params = super().get_params(deep)
        params.update({
            'm_i': self.m_i,
            'max_non_improving': self.max_non_improving,
            'bad_medoid_fraction': self.bad_medoid_fraction
        })
        return params
