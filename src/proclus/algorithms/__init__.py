"""Projected clustering algorithms."""

from .proclus import PROCLUS, ProclusObjective, compute_bad_medoids, next_working_set

__all__ = [
    'PROCLUS',
    'ProclusObjective',
    'compute_bad_medoids',
    'next_working_set'
]
