# tests/utils.py
"""
Small, reusable helpers used across the PROCLUS test suite.

Functions:
- to_numpy(x): tensor or array-like to a numpy array.
- assert_valid_clustering(X, clustering): structural checks every PROCLUS result must pass.
- DictRelation: a minimal user-defined VectorRelation with arbitrary ids.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict

import numpy as np
import torch

from proclus.base.interfaces import VectorRelation


def to_numpy(x: Any) -> np.ndarray:
    """Convert a tensor (any device) or array-like to numpy."""
    if isinstance(x, torch.Tensor):
        return x.detach().cpu().numpy()
    return np.asarray(x)


def assert_valid_clustering(X: Any, clustering, n_clusters: int | None = None,
                            atol: float = 1e-9) -> None:
    """
    Check the invariants of a final PROCLUS clustering against its data.

    - clusters are non-empty, pairwise disjoint and together cover every row of X
    - every cluster has at least one dimension, all within [0, D)
    - every centroid equals the mean of its members
    - at most n_clusters clusters (if given)
    - clusters are named cluster_1, cluster_2, ... in order
    """
    X = to_numpy(X)
    n, d = X.shape

    if n_clusters is not None:
        assert 1 <= len(clustering) <= n_clusters

    seen = set()
    for number, cluster in enumerate(clustering, start=1):
        assert cluster.name == f"cluster_{number}"
        assert cluster.size > 0
        assert len(cluster.dimensions) >= 1
        assert all(0 <= j < d for j in cluster.dimensions)
        assert list(cluster.dimensions) == sorted(set(cluster.dimensions))

        members = set(cluster.ids)
        assert len(members) == cluster.size
        assert not (members & seen), "clusters must be disjoint"
        seen |= members

        mean = X[list(cluster.ids)].mean(axis=0)
        np.testing.assert_allclose(to_numpy(cluster.centroid), mean, atol=atol)

    assert seen == set(range(n)), "clusters must cover every point"


class DictRelation(VectorRelation):
    """Minimal relation over a dict of vectors with Euclidean distance.

    Implements only the abstract methods, so the engine runs on the default
    vectors() and distances() helpers.
    """

    def __init__(self, vectors):
        self._vectors = {k: torch.as_tensor(v, dtype=torch.float64) for k, v in vectors.items()}

    @property
    def size(self):
        return len(self._vectors)

    @property
    def dimensionality(self):
        return next(iter(self._vectors.values())).shape[0]

    def get(self, point_id):
        return self._vectors[point_id]

    def iter_ids(self):
        return iter(self._vectors)

    def distance(self, id1, id2):
        return torch.linalg.norm(self._vectors[id1] - self._vectors[id2]).item()

    def range_query(self, point_id, radius):
        hits = []
        for other in self._vectors:
            d = self.distance(point_id, other)
            if d <= radius:
                hits.append((other, d))
        return hits


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("fit", {"n": 330, "d": 2, "K": 4, "L": 2}):
    ...     model.fit(X)

    Output
    ------
    [timing] fit {"n":330,"d":2,"K":4,"L":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.

    Example:
    [timing] fit {"n":330,"d":2,"K":4,"L":2} 0.123s
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"), default=repr)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
