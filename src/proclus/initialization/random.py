"""
Random initialization strategy.

Draws distinct ids uniformly at random. Used both to sample the candidate
pool from the whole relation and to pick the first working set of medoids
out of the greedy superset.
"""

from typing import List, Hashable, Sequence
import torch

from ..base.interfaces import InitializationStrategy, VectorRelation


def random_sample(ids: Sequence[Hashable], size: int,
                  generator: torch.Generator) -> List[Hashable]:
    """Select `size` distinct ids without replacement.

    Args:
        ids: Ids to draw from
        size: Number of ids to draw
        generator: Run-local random source

    Returns:
        Drawn ids, in draw order
    """
    if size > len(ids):
        raise ValueError(f"Cannot sample {size} ids from {len(ids)}")

    order = torch.randperm(len(ids), generator=generator)[:size]
    return [ids[i] for i in order.tolist()]


class RandomInit(InitializationStrategy):
    """Random selection of medoids among the candidates.

    Selects n_medoids random candidates (without replacement).
    """

    def select(self, relation: VectorRelation, candidates: Sequence[Hashable],
               n_medoids: int, generator: torch.Generator,
               **kwargs) -> List[Hashable]:
        """Pick medoids uniformly at random.

        Args:
            relation: Relation holding the candidates (unused)
            candidates: Ids to choose from
            n_medoids: Number of medoids
            generator: Run-local random source

        Returns:
            List of distinct ids
        """
        if n_medoids > len(candidates):
            raise ValueError(f"Cannot select {n_medoids} medoids from "
                             f"{len(candidates)} candidates")

        return random_sample(list(candidates), n_medoids, generator)
