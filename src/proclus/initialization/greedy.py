"""
Greedy piercing initialization.

Selects a well-separated set of medoids by farthest-point traversal, so that
the superset is likely to contain at least one point of every cluster.
"""

from typing import List, Hashable, Sequence
import torch

from ..base.interfaces import InitializationStrategy, VectorRelation


class GreedyPiercingInit(InitializationStrategy):
    """Farthest-point selection of a piercing set.

    Algorithm:
    1. Choose first medoid uniformly at random
    2. For each remaining medoid:
       - Track each candidate's distance to its nearest chosen medoid
       - Choose the candidate for which that distance is largest
       - Lower the tracked distances with the new medoid

    Ties go to the candidate that comes first in `candidates`, so a fixed
    seed and a fixed candidate order always give the same medoids.
    """

    def select(self, relation: VectorRelation, candidates: Sequence[Hashable],
               n_medoids: int, generator: torch.Generator,
               **kwargs) -> List[Hashable]:
        """Select a piercing set of medoids.

        Args:
            relation: Relation used for the distance computations
            candidates: Sampled ids to choose from
            n_medoids: Number of medoids to return
            generator: Run-local random source

        Returns:
            List of distinct ids in selection order
        """
        candidates = list(candidates)
        n_candidates = len(candidates)

        if n_medoids > n_candidates:
            raise ValueError(f"Cannot select {n_medoids} medoids from "
                             f"{n_candidates} candidates")
        if n_medoids <= 0:
            return []

        # m_1 is a random candidate
        first = int(torch.randint(n_candidates, (1,), generator=generator).item())
        medoids = [candidates[first]]

        # Distance of every candidate to its closest medoid so far
        distances = relation.distances(candidates[first], candidates).clone()
        chosen = torch.zeros(n_candidates, dtype=torch.bool, device=distances.device)
        chosen[first] = True

        for _ in range(1, n_medoids):
            masked = distances.masked_fill(chosen, float('-inf'))
            idx = int(torch.argmax(masked).item())

            medoids.append(candidates[idx])
            chosen[idx] = True

            new_distances = relation.distances(candidates[idx], candidates)
            distances = torch.minimum(distances, new_distances.to(distances.device))

        return medoids
