import numpy as np
import pytest
import torch

from utils import DictRelation, assert_valid_clustering, time_block
from data_gen import make_separated_blobs

try:
    from proclus import PROCLUS
    from proclus.utils.metrics import adjusted_rand_score, pair_counting_f_measure
except Exception:
    PROCLUS = None

pytestmark = pytest.mark.skipif(PROCLUS is None, reason="PROCLUS not importable")


def _fit_exact(X, seed):
    """
    Sample = whole data set, superset = K medoids: the greedy traversal then
    visits each blob exactly once, so every seed sees the same partition.
    """
    model = PROCLUS(n_clusters=3, l=2, k_i=100, m_i=1, random_state=seed)
    return model.fit(X)


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_i1_separated_blobs_recovered_exactly(seed):
    """
    I1: Three well-separated 2-D blobs (50 / 100 / 150 points).

    Expectations:
    - all three blobs come back as clusters, sizes 50 / 100 / 150
    - every cluster is projected on both dimensions (K * L = K * D pairs)
    - pair-counting F-measure and ARI are 1
    - the search stops 10 passes after its only improvement
    """
    X, y = make_separated_blobs(seed=seed)

    with time_block("I1", meta={"n": int(X.shape[0]), "d": 2, "K": 3, "L": 2}):
        model = _fit_exact(X, seed)

    clustering = model.clustering_
    assert_valid_clustering(X, clustering, n_clusters=3)
    assert sorted(clustering.sizes()) == [50, 100, 150]
    assert all(c.dimensions == (0, 1) for c in clustering)

    labels = model.labels_
    assert pair_counting_f_measure(torch.as_tensor(y), labels) == pytest.approx(1.0)
    assert adjusted_rand_score(torch.as_tensor(y), labels) == pytest.approx(1.0)

    assert model.n_iter_ == 11
    assert [s.improved for s in model.history_[1:]] == [True] + [False] * 10


def test_i1_centroids_and_predict():
    X, y = make_separated_blobs(seed=9)
    model = _fit_exact(X, 9)

    labels = model.labels_.numpy()
    for k, cluster in enumerate(model.clustering_):
        members = np.flatnonzero(labels == k)
        np.testing.assert_allclose(cluster.centroid.numpy(), X[members].mean(axis=0), atol=1e-9)

    torch.testing.assert_close(model.predict(X), model.labels_)

    centers = np.array([[0.0, 0.0], [10.0, 0.0], [0.0, 10.0]])
    assert sorted(model.predict(centers).tolist()) == [0, 1, 2]


def test_i1_custom_relation_with_string_ids():
    """The engine only needs the relation contract; ids need not be row numbers."""
    X, y = make_separated_blobs(seed=4)
    ids = [f"p{i:03d}" for i in range(X.shape[0])]
    rel = DictRelation(dict(zip(ids, X)))

    model = PROCLUS(n_clusters=3, l=2, k_i=100, m_i=1, random_state=4).fit(rel)

    clusters = model.clustering_
    assert sorted(clusters.sizes()) == [50, 100, 150]
    members = [set(c.ids) for c in clusters]
    assert set().union(*members) == set(ids)
    for c in clusters:
        truth = {y[int(i[1:])] for i in c.ids}
        assert len(truth) == 1
