"""
External clustering evaluation metrics.

Used to compare a clustering against ground-truth labels, e.g. when checking
a run against a reference partition of a benchmark data set.
"""

from typing import Hashable, Sequence, Tuple
import torch
from torch import Tensor

from ..base.data_structures import Clustering


def clustering_to_labels(clustering: Clustering, ids: Sequence[Hashable]) -> Tensor:
    """Flatten a clustering into an (n,) label tensor aligned with ids.

    Ids that belong to no cluster get label -1.
    """
    return clustering.labels(ids)


def contingency_matrix(labels_true: Tensor, labels_pred: Tensor) -> Tensor:
    """Build contingency matrix for comparing clusterings.

    Labels may be arbitrary integers (including -1 for noise); each distinct
    value is its own class.

    Args:
        labels_true: (n,) true labels
        labels_pred: (n,) predicted labels

    Returns:
        Contingency matrix C where C[i,j] is the number of samples
        with the i-th true label and j-th predicted label
    """
    labels_true = torch.as_tensor(labels_true).long()
    labels_pred = torch.as_tensor(labels_pred).long()

    if labels_true.shape != labels_pred.shape:
        raise ValueError(f"Label shapes differ: {tuple(labels_true.shape)} "
                         f"vs {tuple(labels_pred.shape)}")

    _, true_idx = torch.unique(labels_true, return_inverse=True)
    _, pred_idx = torch.unique(labels_pred, return_inverse=True)

    n_true = int(true_idx.max().item()) + 1 if len(true_idx) else 0
    n_pred = int(pred_idx.max().item()) + 1 if len(pred_idx) else 0

    matrix = torch.zeros(n_true * n_pred, dtype=torch.long)
    matrix.index_add_(0, true_idx * n_pred + pred_idx,
                      torch.ones_like(true_idx))

    return matrix.view(n_true, n_pred)


def _pair_counts(contingency: Tensor) -> Tuple[float, float, float, float]:
    """Pairs together in both, in the true partition, in the predicted one, total."""
    c = contingency.double()
    n = c.sum()
    in_both = torch.sum(c * (c - 1)) / 2
    in_true = torch.sum(c.sum(dim=1) * (c.sum(dim=1) - 1)) / 2
    in_pred = torch.sum(c.sum(dim=0) * (c.sum(dim=0) - 1)) / 2
    total = n * (n - 1) / 2
    return in_both.item(), in_true.item(), in_pred.item(), total.item()


def pair_counting_f_measure(labels_true: Tensor, labels_pred: Tensor) -> float:
    """Pair-counting F1 score.

    Precision is the fraction of predicted co-clustered pairs that are also
    together in the ground truth, recall the converse.

    Returns:
        F1 in [0, 1]; 1.0 when both partitions are all singletons
    """
    in_both, in_true, in_pred, _ = _pair_counts(contingency_matrix(labels_true, labels_pred))

    if in_true + in_pred == 0:
        return 1.0

    return 2.0 * in_both / (in_true + in_pred)


def adjusted_rand_score(labels_true: Tensor, labels_pred: Tensor) -> float:
    """Compute Adjusted Rand Index.

    ARI is 1.0 for perfect match, 0.0 for random labeling.

    Args:
        labels_true: (n,) ground truth labels
        labels_pred: (n,) predicted labels

    Returns:
        ARI score in [-1, 1]
    """
    in_both, in_true, in_pred, total = _pair_counts(contingency_matrix(labels_true, labels_pred))

    if total == 0:
        return 1.0

    # Expected index
    expected_index = in_true * in_pred / total
    max_index = (in_true + in_pred) / 2

    if max_index - expected_index == 0:
        return 1.0

    return (in_both - expected_index) / (max_index - expected_index)
