"""
In-memory relation backed by a single (n, d) tensor.

Range queries are linear scans, which is what a small to medium data set
needs; an indexed relation can replace it behind the same interface.
"""

from typing import Optional, List, Tuple, Hashable, Iterator, Sequence, Union
import torch
from torch import Tensor
import numpy as np

from ..base.interfaces import VectorRelation, DistanceMetric
from ..distances.euclidean import EuclideanDistance
from ..utils.validation import validate_data


class TensorRelation(VectorRelation):
    """Relation over the rows of a data matrix.

    Row i is stored under ``ids[i]``; ids default to ``0..n-1``.
    """

    def __init__(self,
                 data: Union[Tensor, np.ndarray, list],
                 ids: Optional[Sequence[Hashable]] = None,
                 metric: Optional[DistanceMetric] = None,
                 dtype: torch.dtype = torch.float64,
                 device: Optional[torch.device] = None):
        """
        Args:
            data: (n, d) data matrix
            ids: Optional ids, one per row, all distinct
            metric: Full-space distance metric (Euclidean if None)
            dtype: Storage dtype
            device: Storage device
        """
        self._data = validate_data(data, dtype=dtype, device=device)
        n_points = self._data.shape[0]

        if ids is None:
            self._ids = tuple(range(n_points))
            self._index = None
        else:
            self._ids = tuple(ids)
            if len(self._ids) != n_points:
                raise ValueError(f"Expected {n_points} ids, got {len(self._ids)}")
            self._index = {point_id: row for row, point_id in enumerate(self._ids)}
            if len(self._index) != n_points:
                raise ValueError("Ids must be distinct")

        self.metric = metric if metric is not None else EuclideanDistance()

    @property
    def size(self) -> int:
        return self._data.shape[0]

    @property
    def dimensionality(self) -> int:
        return self._data.shape[1]

    @property
    def data(self) -> Tensor:
        """The underlying (n, d) tensor in id order."""
        return self._data

    @property
    def ids(self) -> Tuple[Hashable, ...]:
        return self._ids

    @property
    def device(self) -> torch.device:
        return self._data.device

    def row(self, point_id: Hashable) -> int:
        """Row index of point_id."""
        if self._index is None:
            if isinstance(point_id, bool) or not isinstance(point_id, (int, np.integer)) \
                    or not 0 <= point_id < self.size:
                raise KeyError(point_id)
            return int(point_id)
        return self._index[point_id]

    def rows(self, ids: Sequence[Hashable]) -> Tensor:
        """Row indices of ids as a long tensor."""
        return torch.tensor([self.row(i) for i in ids], dtype=torch.long,
                            device=self.device)

    def get(self, point_id: Hashable) -> Tensor:
        return self._data[self.row(point_id)]

    def iter_ids(self) -> Iterator[Hashable]:
        return iter(self._ids)

    def vectors(self, ids: Optional[Sequence[Hashable]] = None) -> Tensor:
        if ids is None:
            return self._data
        return self._data.index_select(0, self.rows(ids))

    def distance(self, id1: Hashable, id2: Hashable) -> float:
        return self.metric.compute(self.get(id1).unsqueeze(0), self.get(id2))[0].item()

    def distances(self, point_id: Hashable, ids: Sequence[Hashable]) -> Tensor:
        return self.metric.compute(self.vectors(ids), self.get(point_id))

    def range_query(self, point_id: Hashable, radius: float) -> List[Tuple[Hashable, float]]:
        """Linear-scan range query.

        Returns:
            (id, distance) pairs with distance <= radius, in id order
        """
        dists = self.metric.compute(self._data, self.get(point_id))
        hits = torch.nonzero(dists <= radius, as_tuple=True)[0].tolist()
        hit_dists = dists[hits].tolist()
        return [(self._ids[row], d) for row, d in zip(hits, hit_dists)]

    def __repr__(self) -> str:
        return (f"TensorRelation(size={self.size}, dimensionality={self.dimensionality}, "
                f"metric={self.metric!r})")


def as_relation(X: Union[VectorRelation, Tensor, np.ndarray, list],
                device: Optional[torch.device] = None) -> VectorRelation:
    """Wrap raw data in a TensorRelation; pass relations through unchanged."""
    if isinstance(X, VectorRelation):
        return X
    return TensorRelation(X, device=device)
