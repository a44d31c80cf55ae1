"""
Subspace cluster visualization utilities.

Provides functions for plotting projected clustering results: scatter plots
of two chosen features and a cluster-by-dimension map of the correlated
dimensions.
"""

from typing import Optional, Tuple, List, Hashable, Sequence, Union
import torch
from torch import Tensor
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import Clustering


def plot_subspace_clusters_2d(X: Union[Tensor, np.ndarray],
                              clustering: Clustering,
                              ids: Optional[Sequence[Hashable]] = None,
                              features: Tuple[int, int] = (0, 1),
                              ax: Optional[plt.Axes] = None,
                              colors: Optional[List[str]] = None,
                              alpha: float = 0.7,
                              center_marker: str = 'X',
                              center_size: int = 200,
                              point_size: int = 30,
                              show_legend: bool = True,
                              title: Optional[str] = None) -> plt.Axes:
    """Plot a subspace clustering on two features.

    Args:
        X: (n, d) data points, row i holding the point with id ids[i]
        clustering: Result of a PROCLUS run
        ids: Ids of the rows of X (0..n-1 if None)
        features: The two feature indices to plot
        ax: Matplotlib axes (created if None)
        colors: List of colors for clusters
        alpha: Point transparency
        center_marker: Marker for centroids
        center_size: Size of centroid markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    # Convert to numpy for matplotlib
    X_np = X.detach().cpu().numpy() if isinstance(X, Tensor) else np.asarray(X)
    if ids is None:
        ids = list(range(X_np.shape[0]))
    labels_np = clustering.labels(ids).numpy()
    fx, fy = features

    n_clusters = len(clustering)

    # Default colors
    if colors is None:
        cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
        colors = [cmap(i % cmap.N) for i in range(max(n_clusters, 1))]

    unassigned = labels_np < 0
    if unassigned.any():
        ax.scatter(X_np[unassigned, fx], X_np[unassigned, fy],
                   c='lightgray', s=point_size, alpha=alpha, label='Unassigned')

    # Plot each cluster
    for k, cluster in enumerate(clustering):
        mask = labels_np == k
        ax.scatter(X_np[mask, fx], X_np[mask, fy],
                   c=[colors[k % len(colors)]],
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'{cluster.name} (dims {list(cluster.dimensions)})')

    # Plot centroids
    if n_clusters:
        centers_np = clustering.centroids().detach().cpu().numpy()
        ax.scatter(centers_np[:, fx], centers_np[:, fy],
                   c='black',
                   marker=center_marker,
                   s=center_size,
                   edgecolors='white',
                   linewidth=2,
                   label='Centroids',
                   zorder=10)

    ax.set_xlabel(f'Feature {fx}')
    ax.set_ylabel(f'Feature {fy}')

    if title:
        ax.set_title(title)

    if show_legend:
        ax.legend()

    return ax


def plot_dimension_map(clustering: Clustering,
                       dimensionality: int,
                       ax: Optional[plt.Axes] = None,
                       cmap: str = 'Greens',
                       title: Optional[str] = 'Correlated dimensions') -> plt.Axes:
    """Show which dimensions each cluster is projected on.

    Args:
        clustering: Result of a PROCLUS run
        dimensionality: Number of dimensions D of the data
        ax: Matplotlib axes (created if None)
        cmap: Colormap name
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(max(4, dimensionality * 0.4), max(2, len(clustering) * 0.5)))

    if len(clustering):
        masks = torch.stack([c.dimension_mask(dimensionality) for c in clustering])
    else:
        masks = torch.zeros(0, dimensionality, dtype=torch.bool)

    ax.imshow(masks.numpy().astype(float), cmap=cmap, aspect='auto', vmin=0.0, vmax=1.0)
    ax.set_yticks(range(len(clustering)))
    ax.set_yticklabels([f'{c.name} ({c.size})' for c in clustering])
    ax.set_xticks(range(dimensionality))
    ax.set_xlabel('Dimension')

    if title:
        ax.set_title(title)

    return ax
