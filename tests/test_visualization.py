# tests/test_visualization.py
"""
U11: Plotting smoke tests (non-interactive backend)
"""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest
import torch

from proclus.base.data_structures import Clustering, SubspaceCluster
from proclus.visualization import plot_dimension_map, plot_subspace_clusters_2d


def _clustering() -> Clustering:
    return Clustering(clusters=(
        SubspaceCluster(name="cluster_1", ids=(0, 1), dimensions=(0,),
                        centroid=torch.tensor([0.5, 0.0, 1.0], dtype=torch.float64)),
        SubspaceCluster(name="cluster_2", ids=(2,), dimensions=(1, 2),
                        centroid=torch.tensor([5.0, 5.0, 5.0], dtype=torch.float64)),
    ))


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


def test_plot_subspace_clusters_2d_with_unassigned():
    X = np.array([[0.0, 0.0, 1.0], [1.0, 0.0, 1.0], [5.0, 5.0, 5.0], [9.0, 9.0, 9.0]])
    ax = plot_subspace_clusters_2d(X, _clustering(), features=(0, 2), title="demo")

    assert ax.get_title() == "demo"
    assert ax.get_xlabel() == "Feature 0"
    assert ax.get_ylabel() == "Feature 2"
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert "Unassigned" in labels
    assert "Centroids" in labels


def test_plot_subspace_clusters_2d_accepts_tensor_and_ax():
    fig, ax = plt.subplots()
    X = torch.tensor([[0.0, 0.0, 1.0], [1.0, 0.0, 1.0], [5.0, 5.0, 5.0]])
    out = plot_subspace_clusters_2d(X, _clustering(), ax=ax, show_legend=False)
    assert out is ax
    assert ax.get_legend() is None


def test_plot_dimension_map():
    ax = plot_dimension_map(_clustering(), dimensionality=3)
    image = ax.get_images()[0].get_array()

    assert image.shape == (2, 3)
    assert image.tolist() == [[1.0, 0.0, 0.0], [0.0, 1.0, 1.0]]
    assert [t.get_text() for t in ax.get_yticklabels()] == ["cluster_1 (2)", "cluster_2 (1)"]
