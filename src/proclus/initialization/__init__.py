"""Medoid initialization strategies."""

from .random import RandomInit, random_sample
from .greedy import GreedyPiercingInit

__all__ = [
    'RandomInit',
    'random_sample',
    'GreedyPiercingInit'
]
